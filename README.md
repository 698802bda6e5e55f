# peptide_geom

Geometry tools for protein structures, in pure Python with no runtime dependencies.
Angles are in radians and lengths in ångströms.

## Modules

- `peptide_geom.vecmath`: the immutable `Vec3` (add, subtract, negate, scale, `dot`, `cross`, `magnitude`, `to_normalized`, `project_to_plane`) and `Quaternion` (`identity`, `from_axis_angle`, `from_unit_vecs`, `rotate_vec`, `inverse`, and `*` for composing rotations), plus `det_from_cols`. Normalizing a zero vector raises `ValueError`.
- `peptide_geom.bond_vecs`: ideal bond lengths (`LEN_C_H`, `LEN_N_H`, `LEN_O_H`, ...) and bond angles; generic tetrahedral (`Tetrahedral`, `tetrahedral()`) and trigonal-planar (`Planar3`, `planar3()`) bond geometry with its legs as `TETRA_A`..`TETRA_D` and `PLANAR3_A`..`PLANAR3_C`; local backbone bond vectors such as `CALPHA_N_BOND`, `CALPHA_R_BOND` and `CP_O_BOND`; `rotate_vec`; and `find_third_bond_vec`, which searches for a third bond satisfying two bond-angle constraints.
- `peptide_geom.residues`: the `AminoAcid` enum (21 residues, including selenocysteine) with `from_single_letter`, `single_letter`, `display_name` (e.g. `"Arg (R)"`) and `chi_count`. An unknown letter raises `ValueError`.
- `peptide_geom.sidechain`: `Sidechain`, an amino acid with its χ angles, all defaulting to τ/2. `from_ident_single_letter` returns `None` for an unknown letter. `get_chi(n)` returns `None` where the residue has no χn; `set_chi` raises `ValueError` there; `add_to_chi` leaves it unchanged. Indices outside 1–5 raise `ValueError`. Tryptophan stores three angles but only χ1 and χ2 are reachable through these methods. `str()` gives a short text form with angles as fractions of τ.
- `peptide_geom.geometry`: `calc_dihedral_angle` (result in [0, τ]; trans is τ/2), `tetra_legs`, `tetra_atoms`, `tetra_atoms_2`, `planar_posit`, the `Dihedral` dataclass (`omega`, `phi`, `psi`, `sidechain`), the `Hybridization` enum and helix/sheet reference angles.
- `peptide_geom.hydrogens`: `Atom`, `Element`, `AtomRole` and `BondError`; `find_bonded_atoms` and `get_prev_bonds`; `add_h_sidechain` and `handle_backbone`; and `aa_data_from_coords`, which computes a residue's backbone dihedrals and returns new hydrogen atoms for its heavy atoms.

## Install

```
pip install .
pip install ".[test]"   # with the test tools
```

## Example

```python
from peptide_geom.vecmath import Vec3
from peptide_geom.geometry import calc_dihedral_angle
from peptide_geom.residues import AminoAcid
from peptide_geom.sidechain import Sidechain

angle = calc_dihedral_angle(Vec3(0, 0, 1), Vec3(1, 0, 0), Vec3(0, 1, 0))

sc = Sidechain.from_aa_type(AminoAcid.from_single_letter("K"))
sc.add_to_chi(1, 0.1)
print(sc.aa_name(), sc.get_chi(1))
```

### Adding hydrogens along a chain

Call `aa_data_from_coords(atoms, amino_acid, prev_cp_ca, next_n)` for each residue in chain order. `atoms` is that residue's `Atom` list with roles set (`N_BACKBONE`, `C_ALPHA`, `C_PRIME`, `SIDECHAIN`, ...). Pass the `(C', Cα)` positions returned for one residue as `prev_cp_ca` for the next, and the next residue's backbone N position as `next_n`; use `None` at the chain ends. Each call returns `(Dihedral, new_hydrogens, this_cp_ca)`. For `amino_acid=None` only side-chain hydrogens are placed and no dihedrals are computed. Problems such as missing backbone atoms are reported through the `peptide_geom.hydrogens` logger rather than raised.

## What it does not do

- It does not read or write structure files; you build `Atom` lists yourself.
- It does not build side-chain coordinates from χ angles; `Sidechain` only stores and edits them.
- There is no command-line tool or viewer.

## Tests

```
pytest
```