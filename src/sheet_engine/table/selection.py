"""Row and cell selection state supplied by the host UI."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence, Tuple

from sheet_engine.config import ROW_NUMBER_COLUMN

from .store import ColumnId, RowId, RowStore

CellRef = Tuple[RowId, ColumnId]
CELL_KEY_SEPARATOR = "|"


def cell_key(row_id: RowId, column_id: ColumnId) -> str:
    return f"{row_id}{CELL_KEY_SEPARATOR}{column_id}"


def split_cell_key(key: str) -> CellRef:
    row_id, _, column_id = key.partition(CELL_KEY_SEPARATOR)
    return row_id, column_id


def _ordered_unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(str(value) for value in values))


@dataclass(frozen=True, slots=True)
class Selection:
    """Selected row ids and cell keys, both in insertion order.

    ``cells`` order matters: the first entry is the anchor for range pastes.
    """

    rows: tuple[RowId, ...] = ()
    cells: tuple[str, ...] = ()
    editing_cell: Optional[CellRef] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", _ordered_unique(self.rows))
        object.__setattr__(self, "cells", _ordered_unique(self.cells))

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.cells

    @property
    def editing(self) -> bool:
        return self.editing_cell is not None

    @property
    def anchor_cell(self) -> Optional[CellRef]:
        if not self.cells:
            return None
        return split_cell_key(self.cells[0])

    def cell_refs(self) -> Tuple[CellRef, ...]:
        return tuple(split_cell_key(key) for key in self.cells)

    def with_rows(self, rows: Iterable[RowId]) -> "Selection":
        """Row selection replaces any cell selection."""

        return replace(self, rows=tuple(rows), cells=())

    def with_cells(self, cells: Iterable[str]) -> "Selection":
        """Cell selection replaces any row selection."""

        return replace(self, rows=(), cells=tuple(cells))

    def with_editing(self, cell: Optional[CellRef]) -> "Selection":
        return replace(self, editing_cell=cell)


def row_range(store: RowStore, start_id: RowId, end_id: RowId) -> tuple[RowId, ...]:
    start = store.index_of(start_id)
    end = store.index_of(end_id)
    if start is None or end is None:
        return ()
    low, high = sorted((start, end))
    return tuple(store.row_at(index).id for index in range(low, high + 1))


def cell_range(
    store: RowStore,
    column_ids: Sequence[ColumnId],
    start: CellRef,
    end: CellRef,
    *,
    row_number_column: str = ROW_NUMBER_COLUMN,
) -> tuple[str, ...]:
    """Keys of the rectangle spanned by ``start`` and ``end``, row-major."""

    columns = list(column_ids)
    start_row = store.index_of(start[0])
    end_row = store.index_of(end[0])
    if start_row is None or end_row is None:
        return ()
    if start[1] not in columns or end[1] not in columns:
        return ()
    row_low, row_high = sorted((start_row, end_row))
    col_low, col_high = sorted((columns.index(start[1]), columns.index(end[1])))
    keys = []
    for row_index in range(row_low, row_high + 1):
        row_id = store.row_at(row_index).id
        for column_id in columns[col_low : col_high + 1]:
            if column_id != row_number_column:
                keys.append(cell_key(row_id, column_id))
    return tuple(keys)


__all__ = [
    "CELL_KEY_SEPARATOR",
    "CellRef",
    "Selection",
    "cell_key",
    "cell_range",
    "row_range",
    "split_cell_key",
]
