"""Spreadsheet clipboard interchange: tab-separated columns, newline rows.

Cell values are neither quoted nor escaped, so a value holding a tab or a
newline reads back as extra columns or rows.
"""

from __future__ import annotations

from typing import Iterable, List

COLUMN_SEPARATOR = "\t"
ROW_SEPARATOR = "\n"


def parse_tsv(text: str) -> List[List[str]]:
    return [line.split(COLUMN_SEPARATOR) for line in text.split(ROW_SEPARATOR)]


def format_tsv(rows: Iterable[Iterable[str]]) -> str:
    return ROW_SEPARATOR.join(COLUMN_SEPARATOR.join(row) for row in rows)


def is_single_value(text: str) -> bool:
    return COLUMN_SEPARATOR not in text and ROW_SEPARATOR not in text


__all__ = [
    "COLUMN_SEPARATOR",
    "ROW_SEPARATOR",
    "format_tsv",
    "is_single_value",
    "parse_tsv",
]
