"""
Start and stop codon sets per NCBI genetic code.

Stop codons come from Biopython (Bio.Data.CodonTable). Start codons are the
SEED bacterial starts ATG, GTG and TTG; NCBI also lists alternative initiators
(ATT, ATC, ATA, CTG) that are too common inside genes to mark a start here.
Membership tests are case-insensitive and only whole triplets can match.
"""
from __future__ import annotations

from functools import lru_cache
from typing import FrozenSet, Iterable

from Bio.Data import CodonTable

from .errors import GeneticCodeError

DEFAULT_GENETIC_CODE = 11

BACTERIAL_STARTS = ("ATG", "GTG", "TTG")
# codes whose start set is exactly BACTERIAL_STARTS
BACTERIAL_CODES = frozenset({4, 11})

_COMP = str.maketrans("ACGTUNacgtun", "TGCAANtgcaan")


def reverse_complement(s: str) -> str:
    return s.translate(_COMP)[::-1]


class CodonSet:
    """Membership-testable set of DNA codons."""

    def __init__(self, codons: Iterable[str]):
        self.codons: FrozenSet[str] = frozenset(c.upper() for c in codons)

    def __contains__(self, codon: object) -> bool:
        if not isinstance(codon, str) or len(codon) != 3:
            return False
        return codon.upper() in self.codons

    def __iter__(self):
        return iter(sorted(self.codons))

    def __len__(self) -> int:
        return len(self.codons)

    def __repr__(self) -> str:
        return f"CodonSet({', '.join(sorted(self.codons))})"


def _table(code: int) -> CodonTable.CodonTable:
    try:
        return CodonTable.unambiguous_dna_by_id[int(code)]
    except (KeyError, TypeError, ValueError):
        raise GeneticCodeError(f"no translation table for genetic code {code!r}") from None


@lru_cache(maxsize=None)
def starts_for(code: int = DEFAULT_GENETIC_CODE) -> CodonSet:
    """Bacterial starts for codes 4 and 11; other codes keep the NCBI starts among them."""
    table = _table(code)
    if int(code) in BACTERIAL_CODES:
        return CodonSet(BACTERIAL_STARTS)
    return CodonSet(c for c in table.start_codons if c in BACTERIAL_STARTS)


@lru_cache(maxsize=None)
def stops_for(code: int = DEFAULT_GENETIC_CODE) -> CodonSet:
    return CodonSet(_table(code).stop_codons)


__all__ = [
    "BACTERIAL_CODES",
    "BACTERIAL_STARTS",
    "CodonSet",
    "DEFAULT_GENETIC_CODE",
    "reverse_complement",
    "starts_for",
    "stops_for",
]
