"""Single-slot registers shared between copy and paste."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional


@dataclass(slots=True)
class CopiedColumns:
    """Column ids touched by the most recent successful copy.

    Empty until the first copy. Paste only reads it to tell whether the
    payload came from the derived column.
    """

    current: List[str] = field(default_factory=list)

    def update(self, columns: Iterable[str]) -> None:
        self.current = list(columns)

    def is_exactly(self, column_id: str) -> bool:
        return self.current == [column_id]

    def includes(self, column_id: str) -> bool:
        return column_id in self.current


class ClipboardRegister:
    """Holds the last TSV payload produced by ``copy``.

    Hosts with access to a system clipboard override ``clipboard_get`` and
    ``clipboard_set``; the defaults keep everything in memory.
    """

    def __init__(self) -> None:
        self._text: Optional[str] = None

    @property
    def text(self) -> Optional[str]:
        return self._text

    def clipboard_get(self) -> Optional[str]:
        return self._text

    def clipboard_set(self, value: str) -> None:
        self._text = value


__all__ = ["ClipboardRegister", "CopiedColumns"]
