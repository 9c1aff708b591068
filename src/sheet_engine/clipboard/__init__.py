"""Copy serialization, paste classification, and reversible commands."""

from .classifier import PasteMode, PasteSpec, build_command, classify, paste_selection
from .commands import (
    Command,
    build_cell_fill,
    build_cell_range,
    build_clear_cells,
    build_clear_rows,
    build_row_fill,
    build_row_range,
)
from .serializer import copy_selection
from .tsv import format_tsv, is_single_value, parse_tsv

__all__ = [
    "Command",
    "PasteMode",
    "PasteSpec",
    "build_cell_fill",
    "build_cell_range",
    "build_clear_cells",
    "build_clear_rows",
    "build_command",
    "build_row_fill",
    "build_row_range",
    "classify",
    "copy_selection",
    "format_tsv",
    "is_single_value",
    "parse_tsv",
    "paste_selection",
]
