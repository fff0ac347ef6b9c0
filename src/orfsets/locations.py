"""
Strand-aware locations on a contig and their sequence-bound views.

Coordinates are 1-based and inclusive. A location whose ``begin`` is greater
than its ``end`` lies on the minus strand; ``begin`` is always the first base
read on the location's own strand.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .codons import CodonSet, reverse_complement, stops_for
from .scanner import scan_frame, window


@dataclass(frozen=True)
class Location:
    contig_id: str
    begin: int
    end: int

    @property
    def strand(self) -> str:
        return "+" if self.begin <= self.end else "-"

    @property
    def left(self) -> int:
        return min(self.begin, self.end)

    @property
    def right(self) -> int:
        return max(self.begin, self.end)

    @property
    def length(self) -> int:
        return self.right - self.left + 1

    def reverse(self) -> "Location":
        """Same span read from the opposite strand."""
        return Location(self.contig_id, self.end, self.begin)

    def __str__(self) -> str:
        return f"{self.contig_id}_{self.begin}{self.strand}{self.length}"


class SequenceLocation:
    """A location bound to its strand-oriented DNA.

    Relative positions are 1-based offsets into ``sequence``; position 1 is
    ``location.begin``.
    """

    def __init__(self, location: Location, sequence: str):
        self.location = location
        self.sequence = sequence

    def __len__(self) -> int:
        return len(self.sequence)

    def __repr__(self) -> str:
        return f"SequenceLocation({self.location}, {len(self.sequence)} bp)"

    def relative_position(self, abs_pos: int) -> Optional[int]:
        loc = self.location
        rel = abs_pos - loc.begin + 1 if loc.strand == "+" else loc.begin - abs_pos + 1
        if 1 <= rel <= len(self.sequence):
            return rel
        return None

    def absolute_position(self, rel: int) -> int:
        loc = self.location
        return loc.begin + rel - 1 if loc.strand == "+" else loc.begin - rel + 1

    def real_location(self, rel_begin: int, rel_end: int) -> Location:
        """Contig location of the relative span ``rel_begin..rel_end`` on this strand."""
        return Location(self.location.contig_id, self.absolute_position(rel_begin), self.absolute_position(rel_end))

    def codon_at(self, rel: int) -> str:
        return self.sequence[rel - 1 : rel + 2]

    def is_codon(self, codons: CodonSet, rel: Optional[int]) -> bool:
        if rel is None or rel < 1:
            return False
        return self.codon_at(rel) in codons

    def scan(self, codons: CodonSet, frame: int) -> Iterator[int]:
        return scan_frame(self.sequence, codons, frame)

    def neighborhood(self, rel: int, num_left: int, num_right: int) -> str:
        return window(self.sequence, rel, num_left, num_right)

    def position_string(self, rel: int) -> str:
        return f"{self.location.contig_id}{self.location.strand}{self.absolute_position(rel)}"


def _oriented(contig_seq: str, strand: str) -> str:
    return contig_seq if strand == "+" else reverse_complement(contig_seq)


def create_sequence_location(genome, location: Location) -> SequenceLocation:
    """Bind ``location`` to its DNA, clipped to the contig."""
    seq = genome.contig(location.contig_id).sequence
    left = max(1, location.left)
    right = min(len(seq), location.right)
    if location.strand == "+":
        loc = Location(location.contig_id, left, right)
    else:
        loc = Location(location.contig_id, right, left)
    return SequenceLocation(loc, _oriented(seq[left - 1 : right], loc.strand))


def create_orf(genome, location: Location) -> SequenceLocation:
    """Extend a peg location to the ORF that contains it.

    The ORF starts right after the nearest upstream in-frame stop and ends
    with the first in-frame stop at or after the peg's start. At a contig
    edge it stops at the last whole codon.
    """
    contig_seq = genome.contig(location.contig_id).sequence
    n = len(contig_seq)
    stops = stops_for(genome.genetic_code)
    strand = location.strand
    oriented = _oriented(contig_seq, strand)
    b = location.begin - 1 if strand == "+" else n - location.begin
    i = b
    while i >= 3 and oriented[i - 3 : i] not in stops:
        i -= 3
    j = b
    while j + 3 <= n and oriented[j : j + 3] not in stops:
        j += 3
    end = j + 3 if j + 3 <= n else j
    end = max(end, i)
    if strand == "+":
        loc = Location(location.contig_id, i + 1, end)
    else:
        loc = Location(location.contig_id, n - i, n - end + 1)
    return SequenceLocation(loc, oriented[i:end])


__all__ = ["Location", "SequenceLocation", "create_orf", "create_sequence_location"]
