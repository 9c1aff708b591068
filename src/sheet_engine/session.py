"""Grid session façade combining store, selection, registers, and history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from sheet_engine.clipboard import (
    Command,
    build_clear_cells,
    build_clear_rows,
    copy_selection,
    paste_selection,
)
from sheet_engine.config import EngineConfig
from sheet_engine.runtime import telemetry
from sheet_engine.table import (
    CellRef,
    ClipboardRegister,
    CommandHistory,
    CopiedColumns,
    Reversible,
    Row,
    RowStore,
    Selection,
    cell_key,
    cell_range,
    row_range,
)
from sheet_engine.table.store import ColumnId, RowId

CellLike = Union[str, CellRef]


@dataclass(slots=True)
class SessionView:
    version: int
    rows: Sequence[Row]
    column_ids: Sequence[ColumnId]
    selection: Selection
    can_undo: bool
    can_redo: bool


class GridSession:
    """One editable grid as seen by a host UI.

    The host feeds selection changes in, calls ``copy``/``paste``/
    ``clear_cells`` from its clipboard and key handlers, and renders
    ``snapshot()``. Every mutation goes through ``history`` so it can be
    undone.
    """

    def __init__(
        self,
        store: RowStore,
        column_ids: Iterable[ColumnId],
        *,
        name: str = "default",
        config: Optional[EngineConfig] = None,
        history: Optional[CommandHistory] = None,
        copied_columns: Optional[CopiedColumns] = None,
        clipboard: Optional[ClipboardRegister] = None,
    ) -> None:
        self.name = name
        self.store = store
        self.column_ids: tuple[ColumnId, ...] = tuple(column_ids)
        self.config = config if config is not None else EngineConfig()
        self.history = (
            history
            if history is not None
            else CommandHistory(self.config.history_limit)
        )
        self.copied_columns = (
            copied_columns if copied_columns is not None else CopiedColumns()
        )
        self.clipboard = clipboard if clipboard is not None else ClipboardRegister()
        self.selection = Selection()

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, object]],
        column_ids: Iterable[ColumnId],
        **kwargs: Any,
    ) -> "GridSession":
        return cls(RowStore.from_dicts(records), column_ids, **kwargs)

    # ---------- selection ----------
    def select_rows(self, row_ids: Iterable[RowId]) -> Selection:
        self.selection = self.selection.with_rows(row_ids)
        return self.selection

    def select_cells(self, cells: Iterable[CellLike]) -> Selection:
        keys = [cell if isinstance(cell, str) else cell_key(*cell) for cell in cells]
        self.selection = self.selection.with_cells(keys)
        return self.selection

    def select_row_range(self, start_id: RowId, end_id: RowId) -> Selection:
        return self.select_rows(row_range(self.store, start_id, end_id))

    def select_cell_range(self, start: CellRef, end: CellRef) -> Selection:
        return self.select_cells(
            cell_range(
                self.store,
                self.column_ids,
                start,
                end,
                row_number_column=self.config.row_number_column,
            )
        )

    def clear_selection(self) -> Selection:
        self.selection = Selection(editing_cell=self.selection.editing_cell)
        return self.selection

    def begin_edit(self, row_id: RowId, column_id: ColumnId) -> None:
        if column_id == self.config.row_number_column:
            return
        self.selection = self.selection.with_editing((row_id, column_id))

    def end_edit(self) -> None:
        self.selection = self.selection.with_editing(None)

    # ---------- clipboard ----------
    def copy(self) -> Optional[str]:
        with telemetry.span(
            "session::copy",
            component="session",
            metadata={"session": self.name},
        ) as handle:
            text = copy_selection(
                self.selection,
                self.store,
                self.column_ids,
                self.copied_columns,
                row_number_column=self.config.row_number_column,
            )
            if text is None:
                handle.noop("nothing_to_copy")
                return None
            self.clipboard.clipboard_set(text)
            handle.add_metadata("columns", len(self.copied_columns.current))
            return text

    def paste(self, text: Optional[str] = None) -> Optional[Command]:
        """Paste ``text`` (or the clipboard register) and record the command."""

        payload = self.clipboard.clipboard_get() if text is None else text
        with telemetry.span(
            "session::paste",
            component="session",
            metadata={"session": self.name},
        ) as handle:
            command = paste_selection(
                payload,
                self.selection,
                self.store,
                self.column_ids,
                self.copied_columns,
                row_number_column=self.config.row_number_column,
                derived_column=self.config.derived_column,
            )
            if command is None:
                handle.noop("nothing_to_paste")
                return None
            handle.add_metadata("mode", command.metadata.get("mode"))
            handle.add_metadata("cells", command.touched_cells)
            return self.history.execute(command)

    def clear_cells(self) -> Optional[Command]:
        """Blank the selected rows (every column) or the selected cells."""

        if self.selection.editing or self.selection.is_empty:
            telemetry.record_noop(
                "clear", "editing" if self.selection.editing else "empty_selection"
            )
            return None
        with telemetry.span(
            "session::clear",
            component="session",
            metadata={"session": self.name},
        ):
            if self.selection.rows:
                command = build_clear_rows(
                    self.store, self.selection.rows, self.column_ids
                )
            else:
                command = build_clear_cells(
                    self.store,
                    self.selection.cell_refs(),
                    row_number_column=self.config.row_number_column,
                )
            return self.history.execute(command)

    # ---------- history ----------
    def undo(self) -> Optional[Reversible]:
        return self._step("undo")

    def redo(self) -> Optional[Reversible]:
        return self._step("redo")

    def _step(self, direction: str) -> Optional[Reversible]:
        if self.selection.editing:
            telemetry.record_noop(direction, "editing")
            return None
        with telemetry.span(
            f"session::{direction}",
            component="session",
            metadata={"session": self.name},
        ) as handle:
            command = getattr(self.history, direction)()
            if command is None:
                handle.noop("history_exhausted")
                return None
            handle.add_metadata("label", command.label)
            return command

    def snapshot(self) -> SessionView:
        return SessionView(
            version=self.store.version,
            rows=self.store.rows,
            column_ids=self.column_ids,
            selection=self.selection,
            can_undo=self.history.can_undo(),
            can_redo=self.history.can_redo(),
        )


__all__ = ["GridSession", "SessionView"]
