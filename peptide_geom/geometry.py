"""Geometry of atomic coordinates: dihedral angles and ideal bond placements."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from peptide_geom.bond_vecs import TETRA_A, TETRA_B, TETRA_C, TETRA_D
from peptide_geom.sidechain import Sidechain
from peptide_geom.vecmath import Quaternion, Vec3, det_from_cols

TAU = math.tau

# Backbone dihedral angles of common secondary structures, in radians.
PHI_HELIX = -0.715584993317675
PSI_HELIX = -0.715584993317675
PHI_SHEET = -140.0 * TAU / 360.0
PSI_SHEET = 135.0 * TAU / 360.0

# A dihedral within this of 0, τ/2 or τ counts as planar.
PLANAR_DIHEDRAL_THRESH = 0.4

# Adjacent bonds wider than this count as trigonal planar rather than
# tetrahedral. Tetrahedral ideal: 1.91; planar ideal: 2.094.
PLANAR_ANGLE_THRESH = 2.00

SP2_PLANAR_ANGLE = TAU / 3.0


class Hybridization(Enum):
    """Bond geometry around an atom."""

    SP = "sp"
    """Linear geometry, e.g. a carbon bonded to 2 atoms."""
    SP2 = "sp2"
    """Planar geometry, e.g. a carbon bonded to 3 atoms."""
    SP3 = "sp3"
    """Tetrahedral geometry, e.g. a carbon bonded to 4 atoms."""


@dataclass
class Dihedral:
    """Backbone and side-chain dihedral angles of one residue, in radians.

    `omega` and `phi` are None for the first residue of a chain; `psi` is None
    for the last.
    """

    omega: float | None = None
    phi: float | None = None
    psi: float | None = None
    sidechain: Sidechain = field(default_factory=Sidechain)

    def __str__(self) -> str:
        result = ""
        if self.omega is not None:
            result = f"  ω: {self.omega / TAU:.2f}τ" + " " + result
        if self.phi is not None:
            result += f"  φ: {self.phi / TAU:.2f}τ"
        if self.psi is not None:
            result += f"  ψ: {self.psi / TAU:.2f}τ"
        return result


def _clamped_acos(value: float) -> float:
    return math.acos(max(-1.0, min(1.0, value)))


def calc_dihedral_angle(bond_middle: Vec3, bond_adjacent1: Vec3, bond_adjacent2: Vec3) -> float:
    """The dihedral angle, in [0, τ], across three consecutive bonds.

    Each bond is an atom's position subtracted from the next one's; order matters.
    A trans arrangement gives τ/2 and a cis arrangement gives 0.
    """
    bond1_on_plane = bond_adjacent1.project_to_plane(bond_middle).to_normalized()
    bond2_on_plane = bond_adjacent2.project_to_plane(bond_middle).to_normalized()

    result = _clamped_acos(bond1_on_plane.dot(bond2_on_plane)) + TAU / 2.0

    # The dot product only covers half a turn; the sign of the determinant
    # tells which half the angle lies on.
    det = det_from_cols(bond1_on_plane, bond2_on_plane, bond_middle)
    return result if det < 0.0 else TAU - result


def tetra_legs(leg_a: Vec3, leg_b: Vec3, leg_c: Vec3) -> Vec3:
    """Given three tetrahedron legs, the unit direction of the fourth."""
    return (-(leg_a + leg_b + leg_c)).to_normalized()


def tetra_atoms(atom_center: Vec3, atom_a: Vec3, atom_b: Vec3, atom_c: Vec3) -> Vec3:
    """Unit vector from the center toward the mean of three bonded atoms."""
    avg = (atom_a + atom_b + atom_c) / 3.0
    return (avg - atom_center).to_normalized()


def tetra_atoms_2(center: Vec3, atom_0: Vec3, atom_1: Vec3, length: float) -> tuple[Vec3, Vec3]:
    """Given two apexes of a tetrahedron, the positions of the other two.

    `length` is the distance from the center to each new apex.
    """
    bond_0 = (atom_0 - center).to_normalized()
    bond_1 = (center - atom_1).to_normalized()

    # Align leg A with bond 0, then spin around it until leg B points at atom 1.
    rotator_a = Quaternion.from_unit_vecs(TETRA_A, bond_0)
    tetra_b_rotated = rotator_a.rotate_vec(TETRA_B)

    dihedral = calc_dihedral_angle(bond_0, tetra_b_rotated, bond_1)
    rotator_b = Quaternion.from_axis_angle(bond_0, -dihedral)
    rotator = rotator_b * rotator_a

    return (
        center + rotator.rotate_vec(TETRA_C) * length,
        center + rotator.rotate_vec(TETRA_D) * length,
    )


def planar_posit(posit_center: Vec3, bond_0: Vec3, bond_1: Vec3, length: float) -> Vec3:
    """Position of the third atom around a trigonal planar (sp2) center."""
    bond_0_unit = bond_0.to_normalized()
    plane_normal = bond_0_unit.cross(bond_1).to_normalized()
    rotator = Quaternion.from_axis_angle(plane_normal, SP2_PLANAR_ANGLE)
    return posit_center + rotator.rotate_vec(-bond_0_unit) * length