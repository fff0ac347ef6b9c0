"""
Frame scanning over a strand-oriented sequence.

Positions are 1-based offsets into the sequence being scanned. A scan is a
plain generator: it never reads past the sequence it was given, so widening
the search (for example to a whole ORF) happens before the scan starts.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .codons import CodonSet

PAD_CHAR = "-"
FRAMES = (1, 2, 3)


@dataclass(frozen=True)
class CandidateExample:
    """One labeled codon position on its way to the writer."""

    identifier: str
    neighborhood: str
    label: bool


def scan_frame(sequence: str, codons: CodonSet, frame: int) -> Iterator[int]:
    """Yield every position in ``frame`` whose codon is in ``codons``, in sequence order."""
    if frame not in FRAMES:
        raise ValueError(f"frame must be 1, 2 or 3, got {frame!r}")
    for i in range(frame - 1, len(sequence) - 2, 3):
        if sequence[i : i + 3] in codons:
            yield i + 1


def window(sequence: str, pos: int, num_left: int, num_right: int, pad: str = PAD_CHAR) -> str:
    """Characters from ``pos - num_left`` through ``pos + num_right``, padded outside the sequence."""
    if num_left < 0 or num_right < 0:
        raise ValueError("window spans must be non-negative")
    n = len(sequence)
    return "".join(sequence[i] if 0 <= i < n else pad for i in range(pos - 1 - num_left, pos + num_right))


__all__ = ["CandidateExample", "FRAMES", "PAD_CHAR", "scan_frame", "window"]
