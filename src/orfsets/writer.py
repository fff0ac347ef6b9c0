"""
Streaming, class-balanced output of labeled rows.

The writer keeps only running counts. A row whose label has been kept no more
often than the other label is always written. A row of the over-represented
label is written only while the kept ratio stays within the fuzz factor, and
then only with probability ``min(1, fuzz * seen_other / seen_this)`` so that a
long run of one label is thinned evenly instead of being cut off at the cap.
The probability uses submitted counts, not kept counts: with kept counts it
would be 1 whenever the cap allows the row.
A fuzz factor of 0 turns balancing off and every row is written.
"""
from __future__ import annotations

import logging
import random
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO

from .formatting import LABEL_COLUMN, format_line, format_row

log = logging.getLogger(__name__)


@dataclass
class RunCounters:
    """Counts for one run; ``*_count`` are rows produced, ``*_kept`` rows written."""

    orfs: int = 0
    skipped: int = 0
    true_count: int = 0
    false_count: int = 0
    true_kept: int = 0
    false_kept: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class BalancedLabelWriter:
    def __init__(
        self,
        sink: TextIO,
        fuzz: float = 0.0,
        counters: Optional[RunCounters] = None,
        rng: Optional[random.Random] = None,
        owns_sink: bool = False,
    ):
        if fuzz < 0:
            raise ValueError(f"fuzz factor must be non-negative, got {fuzz}")
        self.sink = sink
        self.fuzz = float(fuzz)
        self.counters = counters if counters is not None else RunCounters()
        self.rng = rng if rng is not None else random.Random()
        self.owns_sink = owns_sink
        self.header_written = False
        self.closed = False
        # index 0 = false, 1 = true
        self._seen: List[int] = [0, 0]
        self._kept: List[int] = [0, 0]

    @classmethod
    def open(
        cls,
        target: str | Path | None,
        fuzz: float = 0.0,
        counters: Optional[RunCounters] = None,
        rng: Optional[random.Random] = None,
    ) -> "BalancedLabelWriter":
        """Open a writer on a file path, or on stdout for ``None``/``"-"``."""
        if target is None or str(target) == "-":
            return cls(sys.stdout, fuzz, counters, rng, owns_sink=False)
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(open(path, "w"), fuzz, counters, rng, owns_sink=True)

    @property
    def balanced(self) -> bool:
        return self.fuzz > 0

    def write_header(self, fields: Iterable[str]) -> None:
        if self.header_written:
            raise RuntimeError("header already written")
        self.sink.write(format_line([*fields, LABEL_COLUMN]) + "\n")
        self.header_written = True

    def accept(self, label: bool) -> bool:
        """Decide whether a row with ``label`` is written; counts must already include it."""
        if not self.balanced:
            return True
        this, other = int(label), int(not label)
        kept_this, kept_other = self._kept[this], self._kept[other]
        if kept_this <= kept_other:
            return True
        if kept_this > self.fuzz * kept_other:
            return False
        p = min(1.0, self.fuzz * self._seen[other] / max(1, self._seen[this]))
        return self.rng.random() < p

    def submit(self, label: bool, identifier: str, neighborhood: Iterable[str]) -> bool:
        if not self.header_written:
            raise RuntimeError("write_header() must be called before submitting rows")
        label = bool(label)
        self._seen[int(label)] += 1
        if label:
            self.counters.true_count += 1
        else:
            self.counters.false_count += 1
        if not self.accept(label):
            return False
        self._kept[int(label)] += 1
        if label:
            self.counters.true_kept += 1
        else:
            self.counters.false_kept += 1
        self.sink.write(format_row(identifier, neighborhood, label) + "\n")
        return True

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.sink.flush()
        finally:
            if self.owns_sink:
                self.sink.close()
        c = self.counters
        log.info("All done. %d ORFs, %d true, %d false.", c.orfs, c.true_count, c.false_count)
        if self.balanced:
            log.info("Kept %d true and %d false rows (fuzz %g).", c.true_kept, c.false_kept, self.fuzz)

    def __enter__(self) -> "BalancedLabelWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["BalancedLabelWriter", "RunCounters"]
