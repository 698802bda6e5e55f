"""Ideal bond lengths, bond angles and local bond unit vectors.

Bond vectors are expressed in an atom's local frame. The anchor bond of every
frame is the x axis; the other bonds are placed relative to it from the ideal
bond angles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cache

from peptide_geom.vecmath import Quaternion, Vec3

TAU = math.tau

# Bond lengths, in angstroms.
LEN_CP_N = 1.33
LEN_N_CALPHA = 1.46
LEN_CALPHA_CP = 1.53
LEN_CP_O = 1.2
LEN_CALPHA_H = 1.09
LEN_N_H = 1.01
LEN_C_H = 1.09
LEN_O_H = 0.9572

THETA_HOH_ANGLE = 1.82421813

# Angle between any two bonds of a regular tetrahedron.
TETRA_ANGLE = 1.9106332

# Ideal bond angles, in radians.
BOND_ANGLE_N_CALPHA_CP = 122.7 * TAU / 360.0
BOND_ANGLE_CALPHA_CP_R = 110.6 * TAU / 360.0
BOND_ANGLE_CALPHA_CP_N = 111.0 * TAU / 360.0
BOND_ANGLE_CALPHA_CP_H = 109.5 * TAU / 360.0
BOND_ANGLE_CALPHA_N_R = 110.6 * TAU / 360.0

# The three bonds on C' lie in one plane and sum to a full turn.
BOND_ANGLE_CP_N_CALPHA = 117.2 * TAU / 360.0
BOND_ANGLE_CP_N_O = 122.7 * TAU / 360.0
BOND_ANGLE_CP_CALPHA_O = 120.1 * TAU / 360.0

ANCHOR_BOND_VEC = Vec3(1.0, 0.0, 0.0)

_Z = Vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Tetrahedral:
    """Four tetrahedral bonds, e.g. an sp3 carbon."""

    bond_a: Vec3
    bond_b: Vec3
    bond_c: Vec3
    bond_d: Vec3


@dataclass(frozen=True)
class Planar3:
    """Three equally spaced bonds in a plane, e.g. an sp2 nitrogen."""

    bond_a: Vec3
    bond_b: Vec3
    bond_c: Vec3


@cache
def tetrahedral() -> Tetrahedral:
    """Generic tetrahedral geometry with `bond_a` on the anchor vector."""
    r1 = _Z
    r2 = Quaternion.from_axis_angle(ANCHOR_BOND_VEC, TAU / 3.0).rotate_vec(_Z)
    r3 = Quaternion.from_axis_angle(ANCHOR_BOND_VEC, TAU * 2.0 / 3.0).rotate_vec(_Z)
    return Tetrahedral(
        bond_a=ANCHOR_BOND_VEC,
        bond_b=Quaternion.from_axis_angle(r1, TETRA_ANGLE).rotate_vec(ANCHOR_BOND_VEC),
        bond_c=Quaternion.from_axis_angle(r2, TETRA_ANGLE).rotate_vec(ANCHOR_BOND_VEC),
        bond_d=Quaternion.from_axis_angle(r3, TETRA_ANGLE).rotate_vec(ANCHOR_BOND_VEC),
    )


@cache
def planar3() -> Planar3:
    """Generic trigonal planar geometry with `bond_a` on the anchor vector."""
    return Planar3(
        bond_a=ANCHOR_BOND_VEC,
        bond_b=Quaternion.from_axis_angle(_Z, TAU / 3.0).rotate_vec(ANCHOR_BOND_VEC),
        bond_c=Quaternion.from_axis_angle(_Z, TAU * 2.0 / 3.0).rotate_vec(ANCHOR_BOND_VEC),
    )


def rotate_vec(start: Vec3, angle: float, rot_plane_norm: Vec3) -> Vec3:
    """Rotate `start` by `angle` around the normal of a rotation plane."""
    return Quaternion.from_axis_angle(rot_plane_norm, angle).rotate_vec(start)


def find_third_bond_vec(
    bond1: Vec3,
    bond2: Vec3,
    angle_1_3: float,
    angle_2_3: float,
    bond2_rot_plane_norm: Vec3,
) -> Vec3:
    """Find a third bond making `angle_1_3` with `bond1` and about `angle_2_3` with `bond2`.

    Rotation planes around `bond1` are tried in turn, starting with the one used to
    place `bond2`; the first candidate within tolerance is returned, otherwise the
    last candidate tried.
    """
    eps = 0.01
    n_planes = 120
    incr = TAU / n_planes

    result = Vec3.zero()
    for i in range(n_planes):
        plane_norm = rotate_vec(bond2_rot_plane_norm, incr * i, bond1)
        result = rotate_vec(bond1, angle_1_3, plane_norm)
        measured = math.acos(max(-1.0, min(1.0, bond2.dot(result))))
        if abs(measured - angle_2_3) < eps:
            break
    return result


_TETRA = tetrahedral()
_PLANAR3 = planar3()

TETRA_A = _TETRA.bond_a
TETRA_B = _TETRA.bond_b
TETRA_C = _TETRA.bond_c
TETRA_D = _TETRA.bond_d

PLANAR3_A = _PLANAR3.bond_a
PLANAR3_B = _PLANAR3.bond_b
PLANAR3_C = _PLANAR3.bond_c

_BOND_ANGLE_RING5 = TAU / 2.0 - TAU / 5.0
_BOND_ANGLE_RING6 = TAU / 2.0 - TAU / 6.0
_BOND_ANGLE_HO = TAU * 0.3

RING_BOND_IN = ANCHOR_BOND_VEC
RING5_BOND_OUT = rotate_vec(ANCHOR_BOND_VEC, _BOND_ANGLE_RING5, _Z)
RING6_BOND_OUT = rotate_vec(ANCHOR_BOND_VEC, _BOND_ANGLE_RING6, _Z)
RING5_BOND_OUT_B = rotate_vec(ANCHOR_BOND_VEC, -_BOND_ANGLE_RING5, _Z)
RING6_BOND_OUT_B = rotate_vec(ANCHOR_BOND_VEC, -_BOND_ANGLE_RING6, _Z)

H_BOND_IN = ANCHOR_BOND_VEC
H_BOND_OUT = ANCHOR_BOND_VEC
O_BOND_IN = ANCHOR_BOND_VEC
O_BOND_OUT = rotate_vec(ANCHOR_BOND_VEC, _BOND_ANGLE_HO, _Z)

WATER_BOND_H_A = ANCHOR_BOND_VEC
WATER_BOND_H_B = rotate_vec(ANCHOR_BOND_VEC, THETA_HOH_ANGLE, _Z)
WATER_BOND_M = rotate_vec(ANCHOR_BOND_VEC, THETA_HOH_ANGLE / 2.0, _Z)

# Backbone bonds. The first bond of each atom is the anchor vector.
CALPHA_CP_BOND = ANCHOR_BOND_VEC
CP_N_BOND = ANCHOR_BOND_VEC
N_CALPHA_BOND = ANCHOR_BOND_VEC
O_CP_BOND = ANCHOR_BOND_VEC
H_CALPHA_BOND = ANCHOR_BOND_VEC
H_N_BOND = ANCHOR_BOND_VEC

CALPHA_N_BOND = rotate_vec(CALPHA_CP_BOND, BOND_ANGLE_CALPHA_CP_N, _Z)
CP_CALPHA_BOND = rotate_vec(CP_N_BOND, BOND_ANGLE_CP_N_CALPHA, _Z)
N_CP_BOND = rotate_vec(N_CALPHA_BOND, BOND_ANGLE_N_CALPHA_CP, _Z)
N_H_BOND = rotate_vec(N_CALPHA_BOND, TAU * 2.0 / 3.0, _Z)

CALPHA_R_BOND = find_third_bond_vec(
    CALPHA_CP_BOND,
    CALPHA_N_BOND,
    BOND_ANGLE_CALPHA_CP_R,
    BOND_ANGLE_CALPHA_N_R,
    _Z,
)
CALPHA_H_BOND = TETRA_D

CP_O_BOND = find_third_bond_vec(
    CP_N_BOND,
    CP_CALPHA_BOND,
    BOND_ANGLE_CP_N_O,
    BOND_ANGLE_CP_CALPHA_O,
    _Z,
)