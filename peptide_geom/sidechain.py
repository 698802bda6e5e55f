"""Side-chain conformations: an amino acid together with its χ dihedral angles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from peptide_geom.residues import AminoAcid

TAU = math.tau
TAU_DIV2 = TAU / 2.0

# Generic side-chain bond length, in angstroms.
LEN_SC = 1.53

PRO_PHI_MIN = 4.83456
PRO_PHI_MAX = 5.53269

_MAX_CHI = 5

# Tryptophan stores a third angle (the twist between its rings), but it is
# not exposed through the χ accessors.
_ACCESSIBLE_CHI_OVERRIDES: dict[AminoAcid, int] = {AminoAcid.TRP: 2}

# Headers used by the text form where they differ from the display name.
_DISPLAY_HEADERS: dict[AminoAcid, str] = {
    AminoAcid.GLU: "Glu",
    AminoAcid.SER: "Ser(S)",
}


def _check_index(n: int) -> None:
    if not 1 <= n <= _MAX_CHI:
        raise ValueError(f"χ index must be between 1 and {_MAX_CHI}, got {n}")


@dataclass
class Sidechain:
    """An amino acid side chain and its χ dihedral angles, in radians.

    Every angle defaults to τ/2. The default side chain is glycine, which has none.
    """

    aa_type: AminoAcid = AminoAcid.GLY
    chis: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        count = self.aa_type.chi_count()
        if not self.chis:
            self.chis = [TAU_DIV2] * count
        elif len(self.chis) != count:
            raise ValueError(
                f"{self.aa_type.value} takes {count} χ angles, got {len(self.chis)}"
            )
        else:
            self.chis = [float(chi) for chi in self.chis]

    @classmethod
    def from_aa_type(cls, aa_type: AminoAcid) -> Sidechain:
        """A side chain of the given amino acid with default dihedral angles."""
        return cls(aa_type)

    @classmethod
    def from_ident_single_letter(cls, ident: str) -> Sidechain | None:
        """A side chain from a one-letter code, or None if the code is unknown."""
        try:
            aa_type = AminoAcid.from_single_letter(ident)
        except ValueError:
            return None
        return cls(aa_type)

    def aa_name(self) -> str:
        """Three-letter and one-letter codes, e.g. "Arg (R)"."""
        return self.aa_type.display_name()

    def aa_ident_single_letter(self) -> str:
        """The one-letter code, e.g. "R"."""
        return self.aa_type.single_letter()

    def _accessible(self) -> int:
        return _ACCESSIBLE_CHI_OVERRIDES.get(self.aa_type, len(self.chis))

    def get_chi(self, n: int) -> float | None:
        """The χn angle, or None if this residue has no such angle."""
        _check_index(n)
        if n > self._accessible():
            return None
        return self.chis[n - 1]

    def set_chi(self, n: int, value: float) -> None:
        """Set the χn angle. Raises ValueError if this residue has no such angle."""
        _check_index(n)
        if n > self._accessible():
            raise ValueError(f"{self.aa_type.value} has no χ{n} angle")
        self.chis[n - 1] = float(value)

    def add_to_chi(self, n: int, val: float) -> None:
        """Add to the χn angle; residues without that angle are left unchanged."""
        _check_index(n)
        if n <= self._accessible():
            self.chis[n - 1] += val

    def __str__(self) -> str:
        header = _DISPLAY_HEADERS.get(self.aa_type, self.aa_name())
        if not self.chis:
            return header
        parts = []
        for i, chi in enumerate(self.chis, start=1):
            # Arginine's χ5 is shown in radians rather than as a fraction of τ.
            shown = chi if (self.aa_type is AminoAcid.ARG and i == 5) else chi / TAU
            parts.append(f"χ{i}: {shown:.2f}τ")
        return header + "\n" + " ".join(parts)