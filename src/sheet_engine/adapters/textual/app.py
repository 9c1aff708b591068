"""Executable Textual app that hosts a grid session."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import DataTable, Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use sheet_engine.adapters.textual.app"
    ) from exc

from sheet_engine.clipboard import parse_tsv
from sheet_engine.config import EngineConfig
from sheet_engine.runtime import telemetry
from sheet_engine.session import GridSession, SessionView
from sheet_engine.table import CellRef, Row, RowStore

from .controller import TextualGridAdapter, TextualUIHooks

DEMO_COLUMNS: Tuple[str, ...] = ("task", "status", "estimate", "timeValue")
DEMO_ROWS: Tuple[Tuple[str, ...], ...] = (
    ("Draft outline", "Done", "1 hour", "1.00"),
    ("Review notes", "In Progress", "30 min", "0.50"),
    ("Book venue", "Not Started", "2 hours", "2.00"),
    ("Send invites", "Not Started", "15 min", "0.25"),
    ("Prepare slides", "Blocked", "3 hours", "3.00"),
)


def load_session(path: Optional[Path], config: EngineConfig) -> GridSession:
    """Build a session from a TSV file (header line = column ids) or demo data."""

    if path is None:
        columns: Sequence[str] = DEMO_COLUMNS
        body: List[Sequence[str]] = [list(values) for values in DEMO_ROWS]
    else:
        lines = parse_tsv(path.read_text(encoding="utf-8").rstrip("\n"))
        columns, body = lines[0], lines[1:]
    rows = [
        Row(id=str(index + 1), values=dict(zip(columns, values)))
        for index, values in enumerate(body)
    ]
    name = path.name if path else "demo"
    return GridSession(RowStore(rows), columns, name=name, config=config)


class SheetEngineApp(App[None]):
    """DataTable front end for copy, paste, clear, undo and redo."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#grid {
		height: 1fr;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+c", "grid_key('ctrl+c')", "Copy", priority=True),
        Binding("ctrl+z", "grid_key('ctrl+z')", "Undo", priority=True),
        Binding("ctrl+y", "grid_key('ctrl+y')", "Redo", priority=True),
        Binding("delete,backspace", "grid_key('delete')", "Clear"),
        Binding("v", "toggle_anchor", "Range"),
        Binding("r", "select_rows", "Rows"),
        Binding("enter", "toggle_edit", "Edit"),
        Binding("escape", "reset_selection", "Reset"),
    ]

    def __init__(self, session: GridSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualGridAdapter | None = None
        self._table: DataTable | None = None
        self._status_widget: Static | None = None
        self._anchor: CellRef | None = None
        self._cursor: CellRef | None = None
        self._rendered_version = -1

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._table = DataTable(id="grid", cursor_type="cell")
        yield self._table
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        table = self._table
        assert table is not None
        for column_id in self.session.column_ids:
            table.add_column(column_id, key=column_id)
        for number, row in enumerate(self.session.store, start=1):
            values = [row.get(column_id) for column_id in self.session.column_ids]
            table.add_row(*values, key=row.id, label=str(number))
        self._rendered_version = self.session.store.version
        hooks = TextualUIHooks(
            update_table=self._update_table,
            update_status=self._update_status,
            set_clipboard=self.copy_to_clipboard,
            log=lambda line: telemetry.record_event(
                "textual.adapter", level="debug", data={"line": line}
            ),
        )
        self.adapter = TextualGridAdapter(self.session, hooks)
        table.focus()

    def on_data_table_cell_highlighted(self, event: DataTable.CellHighlighted) -> None:
        row_id = event.cell_key.row_key.value
        column_id = event.cell_key.column_key.value
        if row_id is None or column_id is None:
            return
        self._cursor = (row_id, column_id)
        if self._anchor is not None:
            self.session.select_cell_range(self._anchor, self._cursor)
        else:
            self.session.select_cells([self._cursor])
        self._update_status(self._selection_label())

    def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.paste(event.text)
        event.stop()

    def action_grid_key(self, key: str) -> None:
        if self.adapter:
            self.adapter.handle_key(key)

    def action_toggle_anchor(self) -> None:
        self._anchor = None if self._anchor is not None else self._cursor
        self._update_status(
            "range anchor set" if self._anchor else self._selection_label()
        )

    def action_select_rows(self) -> None:
        if self._cursor is None:
            return
        if self._anchor is not None:
            self.session.select_row_range(self._anchor[0], self._cursor[0])
        else:
            self.session.select_rows([self._cursor[0]])
        self._update_status(self._selection_label())

    def action_toggle_edit(self) -> None:
        if self.session.selection.editing:
            self.session.end_edit()
            self._update_status("edit finished")
        elif self._cursor is not None:
            self.session.begin_edit(*self._cursor)
            self._update_status(f"editing {self._cursor[0]}|{self._cursor[1]}")

    def action_reset_selection(self) -> None:
        self._anchor = None
        if self._cursor is not None:
            self.session.select_cells([self._cursor])
        self._update_status(self._selection_label())

    def _selection_label(self) -> str:
        selection = self.session.selection
        if selection.rows:
            return f"{len(selection.rows)} row(s) selected"
        return f"{len(selection.cells)} cell(s) selected"

    def _update_table(self, view: SessionView) -> None:
        if self._table is None or view.version == self._rendered_version:
            return
        for row in view.rows:
            for column_id in view.column_ids:
                self._table.update_cell(row.id, column_id, row.get(column_id))
        self._rendered_version = view.version

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the sheet engine Textual demo.")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="TSV file whose first line holds the column ids (default: demo rows)",
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("SHEET_ENGINE_LOG_PRESET"),
        choices=["development", "production", "performance"],
        help="telelog preset to apply before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    else:
        # Console output would draw over the TUI.
        os.environ.setdefault("SHEET_ENGINE_DISABLE_CONSOLE", "1")
        telemetry.configure()
    session = load_session(args.path, EngineConfig.from_env())
    SheetEngineApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
