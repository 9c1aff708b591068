"""Turn the current selection into a TSV clipboard payload."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sheet_engine.config import ROW_NUMBER_COLUMN
from sheet_engine.runtime import telemetry
from sheet_engine.table.registers import CopiedColumns
from sheet_engine.table.selection import Selection
from sheet_engine.table.store import ColumnId, RowId, RowStore

from .tsv import format_tsv


def copy_selection(
    selection: Selection,
    store: RowStore,
    column_ids: Sequence[ColumnId],
    copied_columns: CopiedColumns,
    *,
    row_number_column: str = ROW_NUMBER_COLUMN,
) -> Optional[str]:
    """Serialize the selection, or return ``None`` when there is nothing to copy.

    Whole rows win over cells when both are selected. Values always come
    from the store, never from whatever the grid displays.
    """

    if selection.editing:
        telemetry.record_noop("copy", "editing")
        return None
    if selection.is_empty:
        telemetry.record_noop("copy", "empty_selection")
        return None

    if selection.rows:
        text = _copy_rows(selection, store, column_ids)
        copied_columns.update(column_ids)
        return text

    cells_by_row: Dict[RowId, List[str]] = {}
    columns: Dict[ColumnId, None] = {}
    for row_id, column_id in selection.cell_refs():
        if column_id == row_number_column:
            continue
        columns[column_id] = None
        row = store.get(row_id)
        if row is not None:
            cells_by_row.setdefault(row_id, []).append(row.get(column_id))

    copied_columns.update(columns)
    return format_tsv(cells_by_row.values())


def _copy_rows(
    selection: Selection, store: RowStore, column_ids: Sequence[ColumnId]
) -> str:
    wanted = set(selection.rows)
    # Store order, not click order.
    rows = [row for row in store if row.id in wanted]
    return format_tsv([row.get(column_id) for column_id in column_ids] for row in rows)


__all__ = ["copy_selection"]
