"""Row store, selection state, registers, and command history."""

from .history import CommandHistory, Reversible
from .registers import ClipboardRegister, CopiedColumns
from .selection import (
    CellRef,
    Selection,
    cell_key,
    cell_range,
    row_range,
    split_cell_key,
)
from .store import Row, RowStore, RowStoreError

__all__ = [
    "CellRef",
    "ClipboardRegister",
    "CommandHistory",
    "CopiedColumns",
    "Reversible",
    "Row",
    "RowStore",
    "RowStoreError",
    "Selection",
    "cell_key",
    "cell_range",
    "row_range",
    "split_cell_key",
]
