"""Adapter that wires a GridSession into Textual-style UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from sheet_engine.session import GridSession, SessionView


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_table: Callable[[SessionView], None]
    update_status: Callable[[str], None] = _noop
    # Receives the TSV payload after a successful copy
    set_clipboard: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualGridAdapter:
    """Maps host shortcuts onto session operations and refreshes the UI."""

    def __init__(self, session: GridSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._shortcuts: Dict[str, Callable[[], str]] = {
            "ctrl+c": self.copy,
            "ctrl+z": self.undo,
            "ctrl+shift+z": self.redo,
            "ctrl+y": self.redo,
            "delete": self.clear,
            "backspace": self.clear,
        }
        self._refresh()

    def handle_key(self, key: str, *, modifiers: Iterable[str] = ()) -> Optional[str]:
        """Dispatch a host key; returns the status shown, or ``None`` if unhandled."""

        token = _shortcut_token(key, modifiers)
        action = self._shortcuts.get(token)
        self._log("key ->", key=token, handled=action is not None)
        if action is None:
            return None
        return action()

    def copy(self) -> str:
        text = self.session.copy()
        if text is None:
            return self._finish("copy: nothing selected")
        self.hooks.set_clipboard(text)
        lines = text.count("\n") + 1
        return self._finish(f"copied {lines} row(s)", refresh=False)

    def paste(self, text: Optional[str]) -> str:
        command = self.session.paste(text)
        if command is None:
            return self._finish("paste: nothing to do")
        mode = command.metadata.get("mode", command.label)
        return self._finish(f"pasted {command.touched_cells} cell(s) [{mode}]")

    def clear(self) -> str:
        command = self.session.clear_cells()
        if command is None:
            return self._finish("clear: nothing selected")
        return self._finish(f"cleared {command.touched_cells} cell(s)")

    def undo(self) -> str:
        command = self.session.undo()
        if command is None:
            return self._finish("nothing to undo")
        return self._finish(f"undo {command.label}")

    def redo(self) -> str:
        command = self.session.redo()
        if command is None:
            return self._finish("nothing to redo")
        return self._finish(f"redo {command.label}")

    def _finish(self, status: str, *, refresh: bool = True) -> str:
        self.hooks.update_status(status)
        if refresh:
            self._refresh()
        self._log("result <-", status=status)
        return status

    def _refresh(self) -> None:
        self.hooks.update_table(self.session.snapshot())

    def _log(self, prefix: str, **fields: object) -> None:
        view = self.session.snapshot()
        snapshot: Dict[str, object] = {
            "session": self.session.name,
            "version": view.version,
            "rows_selected": len(view.selection.rows),
            "cells_selected": len(view.selection.cells),
            "editing": view.selection.editing,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


def _shortcut_token(key: str, modifiers: Iterable[str]) -> str:
    parts = [part for part in key.lower().split("+") if part]
    mods = {str(mod).lower() for mod in modifiers} | set(parts[:-1])
    ordered = [mod for mod in ("ctrl", "alt", "shift") if mod in mods]
    return "+".join(ordered + parts[-1:])


__all__ = ["TextualGridAdapter", "TextualUIHooks"]
