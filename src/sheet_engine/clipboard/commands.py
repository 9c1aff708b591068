"""Reversible grid mutations built from paste and clear requests.

Every builder reads the store once, records the old and new value of each
cell it will touch, and returns a ``Command`` holding both patches.
``execute`` writes the new values and ``undo`` writes the old ones; neither
re-reads the store to decide what to write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Sequence

from sheet_engine.config import ROW_NUMBER_COLUMN
from sheet_engine.runtime import telemetry
from sheet_engine.table.selection import CellRef
from sheet_engine.table.store import ColumnId, Row, RowId, RowStore

Patch = Dict[RowId, Dict[ColumnId, str]]


@dataclass(slots=True)
class Command:
    label: str
    store: RowStore
    before: Patch
    after: Patch
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def touched_cells(self) -> int:
        return sum(len(columns) for columns in self.after.values())

    @property
    def row_ids(self) -> tuple[RowId, ...]:
        return tuple(self.after)

    def execute(self) -> None:
        self._write(self.after, "execute")

    def undo(self) -> None:
        self._write(self.before, "undo")

    def _write(self, patch: Mapping[RowId, Mapping[ColumnId, str]], phase: str) -> None:
        with telemetry.span(
            f"command::{self.label}::{phase}",
            component="commands",
            metadata={"cells": self.touched_cells},
        ) as handle:
            replaced = self.store.apply(patch)
            handle.add_metadata("rows", replaced)


class _Capture:
    """Accumulates old/new values; the first old value seen for a cell wins."""

    def __init__(self) -> None:
        self.before: Patch = {}
        self.after: Patch = {}

    def write(self, row: Row, column_id: ColumnId, value: str) -> None:
        self.before.setdefault(row.id, {}).setdefault(column_id, row.get(column_id))
        self.after.setdefault(row.id, {})[column_id] = value

    def build(
        self, label: str, store: RowStore, **metadata: object
    ) -> Command:
        return Command(
            label=label,
            store=store,
            before=self.before,
            after=self.after,
            metadata=dict(metadata),
        )


def _write_positional(
    capture: _Capture, row: Row, values: Sequence[str], column_ids: Sequence[ColumnId]
) -> None:
    for column_id, value in zip(column_ids, values):
        capture.write(row, column_id, value)


def build_row_fill(
    store: RowStore,
    values: Sequence[str],
    target_indices: Iterable[int],
    column_ids: Sequence[ColumnId],
) -> Command:
    """Write one pasted row into every target row position."""

    capture = _Capture()
    targets = list(target_indices)
    for index in targets:
        _write_positional(capture, store.row_at(index), values, column_ids)
    return capture.build("row_fill", store, targets=len(targets))


def build_row_range(
    store: RowStore,
    pasted_rows: Sequence[Sequence[str]],
    anchor_index: int,
    column_ids: Sequence[ColumnId],
) -> Command:
    """Write pasted rows downward from ``anchor_index``; never adds rows."""

    count = max(0, min(len(pasted_rows), len(store) - anchor_index))
    capture = _Capture()
    for offset in range(count):
        row = store.row_at(anchor_index + offset)
        _write_positional(capture, row, pasted_rows[offset], column_ids)
    return capture.build(
        "row_range",
        store,
        anchor=anchor_index,
        rows=count,
        clipped=len(pasted_rows) - count,
    )


def build_cell_fill(
    store: RowStore,
    value: str,
    cells: Iterable[CellRef],
    *,
    row_number_column: str = ROW_NUMBER_COLUMN,
    copied_from_derived: bool = False,
) -> Command:
    """Write ``value`` verbatim into every selected cell.

    ``copied_from_derived`` is carried as metadata only; the literal text is
    written regardless of where it was copied from.
    """

    capture = _fill_cells(store, value, cells, row_number_column)
    return capture.build(
        "cell_fill", store, copied_from_derived=copied_from_derived
    )


def _fill_cells(
    store: RowStore, value: str, cells: Iterable[CellRef], row_number_column: str
) -> _Capture:
    capture = _Capture()
    for row_id, column_id in cells:
        if column_id == row_number_column:
            continue
        row = store.get(row_id)
        if row is None:
            continue
        capture.write(row, column_id, value)
    return capture


def build_cell_range(
    store: RowStore,
    pasted_rows: Sequence[Sequence[str]],
    anchor_row: int,
    anchor_column: int,
    column_ids: Sequence[ColumnId],
    *,
    copied_from_derived: bool = False,
) -> Command:
    """Write a TSV grid with its top-left corner on the anchor cell.

    Offsets that fall past the last row or the last column are dropped.
    """

    capture = _Capture()
    skipped = 0
    for row_offset, values in enumerate(pasted_rows):
        row_index = anchor_row + row_offset
        if row_index >= len(store):
            skipped += len(values)
            continue
        row = store.row_at(row_index)
        for col_offset, value in enumerate(values):
            column_index = anchor_column + col_offset
            if column_index >= len(column_ids):
                skipped += 1
                continue
            capture.write(row, column_ids[column_index], value)
    return capture.build(
        "cell_range",
        store,
        anchor=(anchor_row, anchor_column),
        skipped=skipped,
        copied_from_derived=copied_from_derived,
    )


def build_clear_rows(
    store: RowStore, row_ids: Iterable[RowId], column_ids: Sequence[ColumnId]
) -> Command:
    """Blank every column of the given rows."""

    capture = _Capture()
    for row_id in row_ids:
        row = store.get(row_id)
        if row is None:
            continue
        for column_id in column_ids:
            capture.write(row, column_id, "")
    return capture.build("clear_rows", store)


def build_clear_cells(
    store: RowStore,
    cells: Iterable[CellRef],
    *,
    row_number_column: str = ROW_NUMBER_COLUMN,
) -> Command:
    return _fill_cells(store, "", cells, row_number_column).build("clear_cells", store)


__all__ = [
    "Command",
    "Patch",
    "build_cell_fill",
    "build_cell_range",
    "build_clear_cells",
    "build_clear_rows",
    "build_row_fill",
    "build_row_range",
]
