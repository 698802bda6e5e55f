"""The amino acids, with their one-letter codes, names and side-chain dihedral counts."""

from __future__ import annotations

from enum import Enum


class AminoAcid(Enum):
    """An amino acid, identified by its three-letter code."""

    ARG = "Arg"
    HIS = "His"
    LYS = "Lys"
    ASP = "Asp"
    GLU = "Glu"
    SER = "Ser"
    THR = "Thr"
    ASN = "Asn"
    GLN = "Gln"
    CYS = "Cys"
    SEC = "Sec"
    GLY = "Gly"
    PRO = "Pro"
    ALA = "Ala"
    VAL = "Val"
    ILE = "Ile"
    LEU = "Leu"
    MET = "Met"
    PHE = "Phe"
    TYR = "Tyr"
    TRP = "Trp"

    @classmethod
    def from_single_letter(cls, ident: str) -> AminoAcid:
        """Look up an amino acid by its one-letter code.

        Raises ValueError if the code names no amino acid.
        """
        try:
            return _BY_LETTER[ident]
        except (KeyError, TypeError):
            raise ValueError(f"unknown amino acid code: {ident!r}") from None

    def single_letter(self) -> str:
        """The one-letter code, e.g. "R" for arginine."""
        return _LETTERS[self]

    def display_name(self) -> str:
        """The three-letter code followed by the one-letter code, e.g. "Arg (R)"."""
        return f"{self.value} ({_LETTERS[self]})"

    def chi_count(self) -> int:
        """The number of side-chain dihedral (χ) angles this residue carries."""
        return _CHI_COUNTS[self]


_LETTERS: dict[AminoAcid, str] = {
    AminoAcid.ARG: "R",
    AminoAcid.HIS: "H",
    AminoAcid.LYS: "K",
    AminoAcid.ASP: "D",
    AminoAcid.GLU: "E",
    AminoAcid.SER: "S",
    AminoAcid.THR: "T",
    AminoAcid.ASN: "N",
    AminoAcid.GLN: "Q",
    AminoAcid.CYS: "C",
    AminoAcid.SEC: "U",
    AminoAcid.GLY: "G",
    AminoAcid.PRO: "P",
    AminoAcid.ALA: "A",
    AminoAcid.VAL: "V",
    AminoAcid.ILE: "I",
    AminoAcid.LEU: "L",
    AminoAcid.MET: "M",
    AminoAcid.PHE: "F",
    AminoAcid.TYR: "Y",
    AminoAcid.TRP: "W",
}

_BY_LETTER: dict[str, AminoAcid] = {letter: aa for aa, letter in _LETTERS.items()}

_CHI_COUNTS: dict[AminoAcid, int] = {
    AminoAcid.ARG: 5,
    AminoAcid.HIS: 2,
    AminoAcid.LYS: 4,
    AminoAcid.ASP: 2,
    AminoAcid.GLU: 3,
    AminoAcid.SER: 1,
    AminoAcid.THR: 1,
    AminoAcid.ASN: 2,
    AminoAcid.GLN: 3,
    AminoAcid.CYS: 1,
    AminoAcid.SEC: 1,
    AminoAcid.GLY: 0,
    AminoAcid.PRO: 0,
    AminoAcid.ALA: 0,
    AminoAcid.VAL: 1,
    AminoAcid.ILE: 2,
    AminoAcid.LEU: 2,
    AminoAcid.MET: 3,
    AminoAcid.PHE: 2,
    AminoAcid.TYR: 2,
    AminoAcid.TRP: 3,
}