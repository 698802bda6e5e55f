import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from peptide_geom.bond_vecs import TETRA_A, TETRA_ANGLE, TETRA_B, TETRA_C, TETRA_D
from peptide_geom.geometry import (
    PHI_SHEET,
    SP2_PLANAR_ANGLE,
    Dihedral,
    Hybridization,
    calc_dihedral_angle,
    planar_posit,
    tetra_atoms,
    tetra_atoms_2,
    tetra_legs,
)
from peptide_geom.residues import AminoAcid
from peptide_geom.vecmath import Quaternion, Vec3

TAU = math.tau
TOL = 1e-6


def circular_diff(a: float, b: float) -> float:
    d = (a - b) % TAU
    return min(d, TAU - d)


def angle_between(a: Vec3, b: Vec3) -> float:
    cos = a.dot(b) / (a.magnitude() * b.magnitude())
    return math.acos(max(-1.0, min(1.0, cos)))


components = st.floats(min_value=-1.0, max_value=1.0, allow_nan=False)
axes = st.tuples(components, components, components).map(lambda t: Vec3(*t)).filter(
    lambda v: v.magnitude() > 0.1
)
angles = st.floats(min_value=-TAU, max_value=TAU, allow_nan=False)
rotations = st.tuples(axes, angles).map(lambda t: Quaternion.from_axis_angle(*t))


# calc_dihedral_angle


def test_trans_dihedral_is_half_turn():
    middle = Vec3(1.0, 0.0, 0.0)
    result = calc_dihedral_angle(middle, Vec3(0.0, -1.0, 0.0), Vec3(0.0, -1.0, 0.0))
    assert result == pytest.approx(TAU / 2.0)


def test_cis_dihedral_is_zero_mod_tau():
    middle = Vec3(1.0, 0.0, 0.0)
    result = calc_dihedral_angle(middle, Vec3(0.0, -1.0, 0.0), Vec3(0.0, 1.0, 0.0))
    assert circular_diff(result, 0.0) < TOL


def test_mirror_images_sum_to_full_turn():
    middle = Vec3(1.0, 0.0, 0.0)
    prev = Vec3(0.0, -1.0, 0.0)
    up = calc_dihedral_angle(middle, prev, Vec3(0.3, 0.0, 1.0))
    down = calc_dihedral_angle(middle, prev, Vec3(0.3, 0.0, -1.0))
    assert up + down == pytest.approx(TAU)
    assert up != pytest.approx(down)


@given(theta=st.floats(min_value=0.0, max_value=TAU, allow_nan=False))
def test_dihedral_range_and_rotation(theta):
    middle = Vec3(0.2, 1.0, -0.4)
    prev = Vec3(1.0, 0.3, 0.5)
    nxt = Vec3(-0.5, 0.2, 1.0)
    base = calc_dihedral_angle(middle, prev, nxt)
    rotated = Quaternion.from_axis_angle(middle, theta).rotate_vec(nxt)
    result = calc_dihedral_angle(middle, prev, rotated)
    assert 0.0 <= result <= TAU
    assert circular_diff(result, base - theta) < 1e-6


@given(scale=st.floats(min_value=0.1, max_value=10.0))
def test_dihedral_ignores_bond_lengths(scale):
    middle = Vec3(0.2, 1.0, -0.4)
    prev = Vec3(1.0, 0.3, 0.5)
    nxt = Vec3(-0.5, 0.2, 1.0)
    base = calc_dihedral_angle(middle, prev, nxt)
    scaled = calc_dihedral_angle(middle * scale, prev * (1.0 / scale), nxt * scale)
    assert circular_diff(base, scaled) < 1e-9


def test_dihedral_with_bond_along_axis_raises():
    middle = Vec3(1.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        calc_dihedral_angle(middle, Vec3(2.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))


# tetra_legs and tetra_atoms


def test_tetra_legs_recovers_fourth_ideal_leg():
    result = tetra_legs(TETRA_A, TETRA_B, TETRA_C)
    assert tuple(result) == pytest.approx(tuple(TETRA_D), abs=1e-5)
    assert result.magnitude() == pytest.approx(1.0)


def test_tetra_legs_is_unit_and_opposite_to_sum():
    a, b, c = Vec3(1.0, 0.2, 0.0), Vec3(-0.3, 1.0, 0.1), Vec3(0.0, -0.4, 1.0)
    result = tetra_legs(a, b, c)
    total = a + b + c
    assert result.magnitude() == pytest.approx(1.0)
    assert angle_between(result, total) == pytest.approx(math.pi)


def test_tetra_atoms_points_away_from_missing_leg():
    center = Vec3(2.0, -1.0, 3.0)
    result = tetra_atoms(center, center + TETRA_B, center + TETRA_C, center + TETRA_D)
    assert tuple(result) == pytest.approx((-1.0, 0.0, 0.0), abs=1e-5)


def test_tetra_atoms_coincident_raises():
    center = Vec3(1.0, 1.0, 1.0)
    with pytest.raises(ValueError):
        tetra_atoms(center, center, center, center)


# tetra_atoms_2


def test_tetra_atoms_2_ideal_frame():
    center = Vec3(0.0, 0.0, 0.0)
    h0, h1 = tetra_atoms_2(center, TETRA_A * 1.5, TETRA_B * 1.5, 1.09)
    assert tuple(h0) == pytest.approx(tuple(TETRA_C * 1.09), abs=1e-6)
    assert tuple(h1) == pytest.approx(tuple(TETRA_D * 1.09), abs=1e-6)


@settings(max_examples=60)
@given(rotation=rotations, length=st.floats(min_value=0.5, max_value=2.0))
def test_tetra_atoms_2_follows_rotated_frame(rotation, length):
    center = Vec3(1.0, -2.0, 0.5)
    atom_0 = center + rotation.rotate_vec(TETRA_A) * 1.5
    atom_1 = center + rotation.rotate_vec(TETRA_B) * 1.5
    h0, h1 = tetra_atoms_2(center, atom_0, atom_1, length)
    expected_0 = center + rotation.rotate_vec(TETRA_C) * length
    expected_1 = center + rotation.rotate_vec(TETRA_D) * length
    assert tuple(h0) == pytest.approx(tuple(expected_0), abs=1e-5)
    assert tuple(h1) == pytest.approx(tuple(expected_1), abs=1e-5)


def test_tetra_atoms_2_geometry():
    center = Vec3(0.0, 0.0, 0.0)
    atom_0 = Vec3(1.5, 0.1, 0.0)
    atom_1 = Vec3(-0.5, 1.4, 0.2)
    h0, h1 = tetra_atoms_2(center, atom_0, atom_1, 1.09)
    for h in (h0, h1):
        assert h.magnitude() == pytest.approx(1.09)
        assert angle_between(h, atom_0) == pytest.approx(TETRA_ANGLE, abs=1e-5)
    assert angle_between(h0, h1) == pytest.approx(TETRA_ANGLE, abs=1e-5)


# planar_posit


def test_planar_posit_completes_trigonal_arrangement():
    center = Vec3(0.0, 0.0, 0.0)
    prev = Vec3(-1.0, 0.0, 0.0)
    nxt = Quaternion.from_axis_angle(Vec3(0.0, 0.0, 1.0), -SP2_PLANAR_ANGLE).rotate_vec(prev)
    result = planar_posit(center, center - prev, nxt - center, 1.01)
    assert result.magnitude() == pytest.approx(1.01)
    assert angle_between(result, prev) == pytest.approx(SP2_PLANAR_ANGLE)
    assert angle_between(result, nxt) == pytest.approx(SP2_PLANAR_ANGLE)


@given(
    bond_0=axes,
    bond_1=axes,
    length=st.floats(min_value=0.5, max_value=2.0),
)
def test_planar_posit_in_plane_at_fixed_angle(bond_0, bond_1, length):
    normal = bond_0.cross(bond_1)
    if normal.magnitude() < 0.05:
        bond_1 = bond_1 + normal.cross(bond_0) + Vec3(0.0, 0.0, 1.0).cross(bond_0)
        normal = bond_0.cross(bond_1)
    if normal.magnitude() < 0.05:
        bond_1 = Vec3(1.0, 0.0, 0.0).cross(bond_0) + Vec3(0.0, 1.0, 0.0).cross(bond_0)
        normal = bond_0.cross(bond_1)
    center = Vec3(0.5, 0.5, -1.0)
    result = planar_posit(center, bond_0, bond_1, length)
    offset = result - center
    assert offset.magnitude() == pytest.approx(length)
    assert abs(offset.dot(normal.to_normalized())) < 1e-6
    assert angle_between(offset, -bond_0) == pytest.approx(SP2_PLANAR_ANGLE, abs=1e-6)


def test_planar_posit_collinear_bonds_raise():
    center = Vec3(0.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        planar_posit(center, Vec3(1.0, 0.0, 0.0), Vec3(2.0, 0.0, 0.0), 1.0)


# Dihedral and Hybridization


def test_default_dihedral_is_empty_glycine():
    d = Dihedral()
    assert d.omega is None and d.phi is None and d.psi is None
    assert d.sidechain.aa_type is AminoAcid.GLY
    assert str(d) == ""


def test_dihedral_text_form():
    d = Dihedral(omega=TAU / 2.0, phi=TAU / 4.0, psi=TAU / 2.0)
    assert str(d) == "  ω: 0.50τ   φ: 0.25τ  ψ: 0.50τ"


def test_dihedral_text_omits_missing_angles():
    d = Dihedral(psi=PHI_SHEET)
    assert str(d) == f"  ψ: {PHI_SHEET / TAU:.2f}τ"
    assert "ω" not in str(d) and "φ" not in str(d)


def test_hybridization_members():
    members = list(Hybridization)
    assert [h.name for h in members] == ["SP", "SP2", "SP3"]
    assert [Hybridization(h.value) for h in members] == members