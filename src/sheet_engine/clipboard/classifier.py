"""Decide how a pasted payload maps onto the current selection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from sheet_engine.config import DERIVED_COLUMN, ROW_NUMBER_COLUMN
from sheet_engine.runtime import telemetry
from sheet_engine.table.registers import CopiedColumns
from sheet_engine.table.selection import CellRef, Selection
from sheet_engine.table.store import ColumnId, RowStore

from .commands import (
    Command,
    build_cell_fill,
    build_cell_range,
    build_row_fill,
    build_row_range,
)
from .tsv import is_single_value, parse_tsv


class PasteMode(str, Enum):
    ROW_FILL = "row_fill"
    ROW_RANGE = "row_range"
    CELL_FILL = "cell_fill"
    CELL_RANGE = "cell_range"


@dataclass(frozen=True, slots=True)
class PasteSpec:
    """Everything a builder needs, resolved against one store snapshot.

    ``target_rows`` holds ascending store positions for row pastes (the
    first one is the anchor). ``cells`` is only set for cell fill.
    """

    mode: PasteMode
    text: str
    rows: Tuple[Tuple[str, ...], ...] = ()
    target_rows: Tuple[int, ...] = ()
    cells: Tuple[CellRef, ...] = ()
    anchor_row: Optional[int] = None
    anchor_column: Optional[int] = None
    copied_from_derived: bool = False


def _parsed(text: str) -> Tuple[Tuple[str, ...], ...]:
    return tuple(tuple(values) for values in parse_tsv(text))


def classify(
    pasted_text: Optional[str],
    selection: Selection,
    store: RowStore,
    column_ids: Sequence[ColumnId],
    copied_columns: CopiedColumns,
    *,
    row_number_column: str = ROW_NUMBER_COLUMN,
    derived_column: str = DERIVED_COLUMN,
) -> Optional[PasteSpec]:
    if selection.editing:
        telemetry.record_noop("paste", "editing")
        return None
    if selection.is_empty:
        telemetry.record_noop("paste", "empty_selection")
        return None
    if not pasted_text:
        telemetry.record_noop("paste", "empty_payload")
        return None

    if selection.rows:
        positions: List[int] = sorted(
            index
            for index in (store.index_of(row_id) for row_id in selection.rows)
            if index is not None
        )
        if not positions:
            telemetry.record_noop("paste", "rows_not_found")
            return None
        rows = _parsed(pasted_text)
        mode = (
            PasteMode.ROW_FILL
            if len(rows) == 1 and len(positions) > 1
            else PasteMode.ROW_RANGE
        )
        return PasteSpec(
            mode=mode,
            text=pasted_text,
            rows=rows,
            target_rows=tuple(positions),
            anchor_row=positions[0],
        )

    anchor = selection.anchor_cell
    if anchor is None:
        telemetry.record_noop("paste", "empty_selection")
        return None
    anchor_row_id, anchor_column_id = anchor
    if anchor_column_id == row_number_column:
        telemetry.record_noop("paste", "row_number_anchor")
        return None

    if is_single_value(pasted_text) and len(selection.cells) > 1:
        return PasteSpec(
            mode=PasteMode.CELL_FILL,
            text=pasted_text,
            cells=selection.cell_refs(),
            copied_from_derived=copied_columns.is_exactly(derived_column),
        )

    anchor_row = store.index_of(anchor_row_id)
    columns = list(column_ids)
    if anchor_row is None or anchor_column_id not in columns:
        telemetry.record_noop("paste", "anchor_not_found")
        return None
    return PasteSpec(
        mode=PasteMode.CELL_RANGE,
        text=pasted_text,
        rows=_parsed(pasted_text),
        anchor_row=anchor_row,
        anchor_column=columns.index(anchor_column_id),
        copied_from_derived=copied_columns.includes(derived_column),
    )


def build_command(
    spec: PasteSpec,
    store: RowStore,
    column_ids: Sequence[ColumnId],
    *,
    row_number_column: str = ROW_NUMBER_COLUMN,
) -> Optional[Command]:
    if spec.mode is PasteMode.ROW_FILL:
        command = build_row_fill(store, spec.rows[0], spec.target_rows, column_ids)
    elif spec.mode is PasteMode.ROW_RANGE:
        command = build_row_range(store, spec.rows, spec.target_rows[0], column_ids)
    elif spec.mode is PasteMode.CELL_FILL:
        command = build_cell_fill(
            store,
            spec.text,
            spec.cells,
            row_number_column=row_number_column,
            copied_from_derived=spec.copied_from_derived,
        )
    elif spec.anchor_row is None or spec.anchor_column is None:
        telemetry.record_noop("paste", "anchor_not_found")
        return None
    else:
        command = build_cell_range(
            store,
            spec.rows,
            spec.anchor_row,
            spec.anchor_column,
            column_ids,
            copied_from_derived=spec.copied_from_derived,
        )
    command.metadata["mode"] = spec.mode.value
    return command


def paste_selection(
    pasted_text: Optional[str],
    selection: Selection,
    store: RowStore,
    column_ids: Sequence[ColumnId],
    copied_columns: CopiedColumns,
    *,
    row_number_column: str = ROW_NUMBER_COLUMN,
    derived_column: str = DERIVED_COLUMN,
) -> Optional[Command]:
    """Classify and build in one step. The command is returned unexecuted."""

    spec = classify(
        pasted_text,
        selection,
        store,
        column_ids,
        copied_columns,
        row_number_column=row_number_column,
        derived_column=derived_column,
    )
    if spec is None:
        return None
    return build_command(spec, store, column_ids, row_number_column=row_number_column)


__all__ = [
    "PasteMode",
    "PasteSpec",
    "build_command",
    "classify",
    "paste_selection",
]
