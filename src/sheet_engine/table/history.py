"""Undo/redo history of executed grid commands."""

from __future__ import annotations

from typing import List, Optional, Protocol, TypeVar

from sheet_engine.config import DEFAULT_HISTORY_LIMIT


class Reversible(Protocol):
    label: str

    def execute(self) -> None: ...

    def undo(self) -> None: ...


CommandT = TypeVar("CommandT", bound=Reversible)


class CommandHistory:
    """Linear history; executing a new command discards the redo tail."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._entries: List[Reversible] = []
        self._index: int = -1

    def __len__(self) -> int:
        return len(self._entries)

    def execute(self, command: CommandT) -> CommandT:
        command.execute()
        self.push(command)
        return command

    def push(self, command: Reversible) -> None:
        """Record an already executed command."""

        del self._entries[self._index + 1 :]
        self._entries.append(command)
        overflow = len(self._entries) - self.limit
        if overflow > 0:
            del self._entries[:overflow]
        self._index = len(self._entries) - 1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[Reversible]:
        if not self.can_undo():
            return None
        command = self._entries[self._index]
        command.undo()
        self._index -= 1
        return command

    def redo(self) -> Optional[Reversible]:
        if not self.can_redo():
            return None
        command = self._entries[self._index + 1]
        command.execute()
        self._index += 1
        return command

    @property
    def undo_depth(self) -> int:
        return self._index + 1

    @property
    def redo_depth(self) -> int:
        return len(self._entries) - 1 - self._index

    def clear(self) -> None:
        self._entries.clear()
        self._index = -1


__all__ = ["CommandHistory", "Reversible"]
