"""
Column layout of the dataset files.

Header: ``name``, then ``p.<offset>`` for every offset from ``-num_left`` to
``+num_right``; ``p.0`` is the first base of the candidate codon. The label
column is appended by the writer. Fields are joined with a single tab and
nothing is escaped, so identifiers and bases must never contain one.
"""
from __future__ import annotations

from typing import Iterable, List

DELIMITER = "\t"
NAME_COLUMN = "name"
LABEL_COLUMN = "type"


def header_fields(num_left: int, num_right: int) -> List[str]:
    return [NAME_COLUMN] + [f"p.{i}" for i in range(-num_left, num_right + 1)]


def format_line(fields: Iterable[str]) -> str:
    return DELIMITER.join(fields)


def format_row(identifier: str, neighborhood: Iterable[str], label: bool) -> str:
    return format_line([identifier, *neighborhood, "1" if label else "0"])


__all__ = ["DELIMITER", "LABEL_COLUMN", "NAME_COLUMN", "format_line", "format_row", "header_fields"]
