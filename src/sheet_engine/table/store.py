"""Row storage for grid sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

RowId = str
ColumnId = str
# {row_id: {column_id: value}}
CellPatch = Mapping[RowId, Mapping[ColumnId, str]]


class RowStoreError(RuntimeError):
    """Raised when a store is built from rows that break id uniqueness."""

    def __init__(self, message: str, *, row_id: RowId | None = None) -> None:
        super().__init__(message)
        self.row_id = row_id


@dataclass(frozen=True, slots=True)
class Row:
    """One grid row. Updates always produce a new ``Row``."""

    id: RowId
    values: Mapping[ColumnId, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, column_id: ColumnId) -> str:
        return self.values.get(column_id) or ""

    def with_values(self, updates: Mapping[ColumnId, str]) -> "Row":
        merged = dict(self.values)
        merged.update(updates)
        return Row(id=self.id, values=merged)

    def to_dict(self, *, id_key: str = "id") -> Dict[str, str]:
        return {id_key: self.id, **self.values}


class RowStore:
    """Ordered rows with id lookup.

    Writes go through ``apply`` which swaps whole ``Row`` objects, so any
    tuple returned by ``rows`` earlier stays valid as a snapshot.
    """

    def __init__(self, rows: Iterable[Row] = ()) -> None:
        self._rows: List[Row] = list(rows)
        self._index: Dict[RowId, int] = {}
        for position, row in enumerate(self._rows):
            if row.id in self._index:
                raise RowStoreError(f"Duplicate row id '{row.id}'", row_id=row.id)
            self._index[row.id] = position
        self.version = 0

    @classmethod
    def from_dicts(
        cls, records: Iterable[Mapping[str, object]], *, id_key: str = "id"
    ) -> "RowStore":
        rows = []
        for record in records:
            if id_key not in record:
                raise RowStoreError(f"Row is missing its '{id_key}' field")
            values = {
                str(key): "" if value is None else str(value)
                for key, value in record.items()
                if key != id_key
            }
            rows.append(Row(id=str(record[id_key]), values=values))
        return cls(rows)

    @property
    def rows(self) -> Sequence[Row]:
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(tuple(self._rows))

    def index_of(self, row_id: RowId) -> Optional[int]:
        return self._index.get(row_id)

    def row_at(self, index: int) -> Row:
        return self._rows[index]

    def get(self, row_id: RowId) -> Optional[Row]:
        index = self._index.get(row_id)
        return None if index is None else self._rows[index]

    def value(self, row_id: RowId, column_id: ColumnId) -> str:
        row = self.get(row_id)
        return row.get(column_id) if row else ""

    def apply(self, patch: CellPatch) -> int:
        """Write ``patch`` and return how many rows were replaced."""

        replaced = 0
        for row_id, updates in patch.items():
            index = self._index.get(row_id)
            if index is None or not updates:
                continue
            self._rows[index] = self._rows[index].with_values(updates)
            replaced += 1
        if replaced:
            self.version += 1
        return replaced

    def to_dicts(self, *, id_key: str = "id") -> List[Dict[str, str]]:
        return [row.to_dict(id_key=id_key) for row in self._rows]


__all__ = [
    "CellPatch",
    "ColumnId",
    "Row",
    "RowId",
    "RowStore",
    "RowStoreError",
]
