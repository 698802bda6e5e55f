"""Hydrogen placement and backbone dihedral angles from atomic coordinates."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum

from peptide_geom.bond_vecs import (
    LEN_C_H,
    LEN_CALPHA_H,
    LEN_N_H,
    LEN_O_H,
    PLANAR3_A,
    PLANAR3_B,
    PLANAR3_C,
    TETRA_A,
    TETRA_B,
    TETRA_C,
    TETRA_D,
)
from peptide_geom.geometry import (
    PLANAR_ANGLE_THRESH,
    Dihedral,
    calc_dihedral_angle,
    planar_posit,
    tetra_atoms,
    tetra_atoms_2,
    tetra_legs,
)
from peptide_geom.residues import AminoAcid
from peptide_geom.vecmath import Quaternion, Vec3

TAU = math.tau

logger = logging.getLogger(__name__)

# Heavy atoms closer than this (angstroms) are treated as covalently bonded.
BOND_DIST_THRESH = 1.80

# Shorter O-C bonds are taken as double bonds, which carry no hydroxyl H.
SINGLE_BOND_MIN_LEN_O = 1.30


class Element(Enum):
    """Chemical elements found in biomolecules."""

    HYDROGEN = "H"
    CARBON = "C"
    NITROGEN = "N"
    OXYGEN = "O"
    SULFUR = "S"
    PHOSPHORUS = "P"
    SELENIUM = "Se"
    OTHER = "X"


class AtomRole(Enum):
    """The part an atom plays in a residue."""

    C_ALPHA = "C_Alpha"
    C_PRIME = "C_Prime"
    N_BACKBONE = "N_Backbone"
    O_BACKBONE = "O_Backbone"
    H_BACKBONE = "H_Backbone"
    SIDECHAIN = "Sidechain"
    H_SIDECHAIN = "H_Sidechain"
    WATER = "Water"
    OTHER = "Other"


@dataclass
class Atom:
    """An atom with a position in angstroms."""

    posit: Vec3
    element: Element
    role: AtomRole | None = None
    serial_number: int = 0
    name: str = ""
    amino_acid: AminoAcid | None = None
    hetero: bool = False
    occupancy: float | None = None
    partial_charge: float | None = None
    temperature_factor: float | None = None


class BondError(Exception):
    """Raised when the bonds needed to orient a placement cannot be found."""


def _clamped_acos(value: float) -> float:
    return math.acos(max(-1.0, min(1.0, value)))


def find_bonded_atoms(atom: Atom, atoms: list[Atom], atom_i: int) -> list[tuple[int, Atom]]:
    """Heavy atoms of `atoms` covalently bonded to `atom`, as (index, atom) pairs.

    `atom_i` is the index of `atom` itself, which is left out. The search is
    linear, so `atoms` should be a small, pre-filtered set.
    """
    return [
        (j, other)
        for j, other in enumerate(atoms)
        if j != atom_i
        and (other.posit - atom.posit).magnitude() < BOND_DIST_THRESH
        and other.element is not Element.HYDROGEN
    ]


def get_prev_bonds(
    atom: Atom, atoms: list[Atom], atom_i: int, atom_next: tuple[int, Atom]
) -> tuple[Vec3, Vec3]:
    """Unit bonds from `atom` to `atom_next`, and from an atom one further on to `atom_next`.

    Raises BondError if `atom_next` has no bonded heavy atom other than `atom`.
    """
    next_i, next_atom = atom_next
    beyond = [pair for pair in find_bonded_atoms(next_atom, atoms, next_i) if pair[0] != atom_i]
    if not beyond:
        raise BondError("no atom bonded beyond the neighbour")

    atom_2_after = beyond[0][1]
    this_to_next = (next_atom.posit - atom.posit).to_normalized()
    next_to_2after = (next_atom.posit - atom_2_after.posit).to_normalized()
    return this_to_next, next_to_2after


def _aligned_rotator(
    anchor: Vec3, second: Vec3, bond_prev: Vec3, bond_back2: Vec3, offset: float
) -> Quaternion:
    """Rotation taking `anchor` onto `bond_prev`, spun so `second` lines up with `bond_back2`."""
    rotator_a = Quaternion.from_unit_vecs(anchor, bond_prev)
    second_rotated = rotator_a.rotate_vec(second)
    dihedral = calc_dihedral_angle(bond_prev, second_rotated, bond_back2)
    rotator_b = Quaternion.from_axis_angle(bond_prev, -dihedral + offset)
    return rotator_b * rotator_a


def _angle_between_bonds(center: Atom, a: Atom, b: Atom) -> float:
    bond_next = (b.posit - center.posit).to_normalized()
    bond_prev = (a.posit - center.posit).to_normalized()
    return _clamped_acos(bond_next.dot(bond_prev))


def _carbon_hydrogens(
    atom: Atom, atoms: list[Atom], i: int, bonded: list[tuple[int, Atom]]
) -> list[Vec3]:
    if len(bonded) == 1:
        # Methyl.
        try:
            bond_prev, bond_back2 = get_prev_bonds(atom, atoms, i, bonded[0])
        except BondError:
            logger.error("Could not find prev bonds on methyl")
            return []
        # Offset rather than aligned, to avoid steric hindrance.
        rotator = _aligned_rotator(TETRA_A, TETRA_B, bond_prev, bond_back2, TAU / 6.0)
        return [
            atom.posit + rotator.rotate_vec(bond) * LEN_C_H
            for bond in (TETRA_B, TETRA_C, TETRA_D)
        ]

    if len(bonded) == 2:
        (_, a0), (_, a1) = bonded
        planar = (
            a0.element is Element.NITROGEN and a1.element is Element.NITROGEN
        ) or _angle_between_bonds(atom, a0, a1) > PLANAR_ANGLE_THRESH
        if planar:
            bond_0 = atom.posit - a0.posit
            bond_1 = a1.posit - atom.posit
            return [planar_posit(atom.posit, bond_0, bond_1, LEN_C_H)]
        return list(tetra_atoms_2(atom.posit, a0.posit, a1.posit, LEN_C_H))

    if len(bonded) == 3:
        neighbours = [pair[1] for pair in bonded]
        if any(n.element is Element.OXYGEN for n in neighbours):
            return []
        if all(n.element is Element.NITROGEN for n in neighbours):
            return []
        if _angle_between_bonds(atom, neighbours[0], neighbours[1]) > PLANAR_ANGLE_THRESH:
            return []
        direction = tetra_atoms(atom.posit, *(n.posit for n in neighbours))
        return [atom.posit - direction * LEN_CALPHA_H]

    return []


def _nitrogen_hydrogens(
    atom: Atom, atoms: list[Atom], i: int, bonded: list[tuple[int, Atom]]
) -> list[Vec3]:
    if len(bonded) == 1:
        # Amine.
        try:
            bond_prev, bond_back2 = get_prev_bonds(atom, atoms, i, bonded[0])
        except BondError:
            logger.error("Could not find prev bonds on amine")
            return []
        rotator = _aligned_rotator(PLANAR3_A, PLANAR3_B, bond_prev, bond_back2, 0.0)
        return [atom.posit + rotator.rotate_vec(bond) * LEN_N_H for bond in (PLANAR3_B, PLANAR3_C)]

    if len(bonded) == 2:
        bond_0 = atom.posit - bonded[0][1].posit
        bond_1 = bonded[1][1].posit - atom.posit
        return [planar_posit(atom.posit, bond_0, bond_1, LEN_N_H)]

    return []


def _oxygen_hydrogens(
    atom: Atom, atoms: list[Atom], i: int, bonded: list[tuple[int, Atom]]
) -> list[Vec3]:
    if len(bonded) != 1:
        return []
    # Hydroxyl: a single H in tetrahedral geometry.
    try:
        bond_prev, bond_back2 = get_prev_bonds(atom, atoms, i, bonded[0])
    except BondError:
        logger.error("Could not find prev bonds on hydroxyl")
        return []
    if (bonded[0][1].posit - atom.posit).magnitude() < SINGLE_BOND_MIN_LEN_O:
        return []
    rotator = _aligned_rotator(TETRA_A, TETRA_B, bond_prev, bond_back2, TAU / 6.0)
    return [atom.posit + rotator.rotate_vec(TETRA_B) * LEN_O_H]


_PLACERS = {
    Element.CARBON: _carbon_hydrogens,
    Element.NITROGEN: _nitrogen_hydrogens,
    Element.OXYGEN: _oxygen_hydrogens,
}


def add_h_sidechain(hydrogens: list[Atom], atoms: list[Atom], h_default: Atom) -> None:
    """Append hydrogens for the side-chain atoms of `atoms` to `hydrogens`.

    Each new hydrogen copies `h_default`, with its role set to H_SIDECHAIN.
    """
    h_default_sc = replace(h_default, role=AtomRole.H_SIDECHAIN)

    for i, atom in enumerate(atoms):
        if atom.role is not AtomRole.SIDECHAIN:
            continue
        placer = _PLACERS.get(atom.element)
        if placer is None:
            continue
        bonded = find_bonded_atoms(atom, atoms, i)
        hydrogens.extend(
            replace(h_default_sc, posit=posit) for posit in placer(atom, atoms, i, bonded)
        )


def handle_backbone(
    hydrogens: list[Atom],
    atoms: list[Atom],
    posits_sc: list[Vec3],
    prev_cp_ca: tuple[Vec3, Vec3] | None,
    next_n: Vec3 | None,
    h_default: Atom,
) -> tuple[Dihedral, tuple[Vec3, Vec3] | None]:
    """Append backbone hydrogens to `hydrogens` and compute backbone dihedrals.

    Returns the dihedral angles and this residue's (C', Cα) positions, or None in
    their place if a backbone atom is missing.
    """
    dihedral = Dihedral()

    backbone: dict[AtomRole, Vec3] = {}
    for atom in atoms:
        if atom.role in (AtomRole.N_BACKBONE, AtomRole.C_ALPHA, AtomRole.C_PRIME):
            backbone[atom.role] = atom.posit

    try:
        n_posit = backbone[AtomRole.N_BACKBONE]
        c_alpha_posit = backbone[AtomRole.C_ALPHA]
        c_p_posit = backbone[AtomRole.C_PRIME]
    except KeyError:
        logger.error("Missing backbone atoms in coords")
        return dihedral, None

    bond_ca_n = c_alpha_posit - n_posit
    bond_cp_ca = c_p_posit - c_alpha_posit

    if prev_cp_ca is not None:
        prev_cp, prev_ca = prev_cp_ca
        bond_cp_prev_ca_prev = prev_cp - prev_ca
        bond_n_cp_prev = n_posit - prev_cp
        dihedral.phi = calc_dihedral_angle(bond_ca_n, bond_n_cp_prev, bond_cp_ca)
        dihedral.omega = calc_dihedral_angle(bond_n_cp_prev, bond_cp_prev_ca_prev, bond_ca_n)

        # H on the backbone N: sp2, planar.
        hydrogens.append(
            replace(h_default, posit=planar_posit(n_posit, bond_n_cp_prev, bond_ca_n, LEN_N_H))
        )

    if next_n is not None:
        bond_n_next_cp = next_n - c_p_posit
        dihedral.psi = calc_dihedral_angle(bond_cp_ca, bond_ca_n, bond_n_next_cp)

    if not posits_sc:
        # Usually glycine, which has no side chain.
        add_h_sidechain(hydrogens, atoms, h_default)
        return dihedral, (c_p_posit, c_alpha_posit)

    closest_sc = min(posits_sc, key=lambda p: (p - c_alpha_posit).magnitude())
    bond_ca_sidechain = c_alpha_posit - closest_sc

    h_posit = c_alpha_posit + tetra_legs(
        -bond_ca_n.to_normalized(),
        bond_cp_ca.to_normalized(),
        -bond_ca_sidechain.to_normalized(),
    ) * LEN_CALPHA_H
    hydrogens.append(replace(h_default, posit=h_posit))

    return dihedral, (c_p_posit, c_alpha_posit)


def aa_data_from_coords(
    atoms: list[Atom],
    amino_acid: AminoAcid | None,
    prev_cp_ca: tuple[Vec3, Vec3] | None,
    next_n: Vec3 | None,
) -> tuple[Dihedral, list[Atom], tuple[Vec3, Vec3] | None]:
    """Dihedral angles, new hydrogens and (C', Cα) positions for one residue.

    `amino_acid` is None for residues that are not amino acids; those get
    side-chain hydrogens only. `prev_cp_ca` and `next_n` come from the
    neighbouring residues and are None at the chain ends.
    """
    h_default = Atom(
        posit=Vec3.zero(),
        element=Element.HYDROGEN,
        role=AtomRole.H_BACKBONE,
        serial_number=0,
        name="H",
        amino_acid=amino_acid,
    )

    hydrogens: list[Atom] = []
    dihedral = Dihedral()
    this_cp_ca = None

    posits_sc = [
        atom.posit
        for atom in atoms
        if atom.role is AtomRole.SIDECHAIN and atom.element is Element.CARBON
    ]

    if amino_acid is not None:
        dihedral, this_cp_ca = handle_backbone(
            hydrogens, atoms, posits_sc, prev_cp_ca, next_n, h_default
        )

    add_h_sidechain(hydrogens, atoms, h_default)

    return dihedral, hydrogens, this_cp_ca