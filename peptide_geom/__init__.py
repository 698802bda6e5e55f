"""Peptide geometry: vectors and quaternions, bond vectors, dihedral angles, side-chain torsions and hydrogen placement."""

__version__ = "0.1.0"
__all__ = ["vecmath", "bond_vecs", "residues", "sidechain", "geometry", "hydrogens"]