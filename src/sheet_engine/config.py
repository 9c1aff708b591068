"""Engine-wide settings resolved from ``SHEET_ENGINE_*`` variables."""

from __future__ import annotations

from dataclasses import dataclass

from sheet_engine.runtime.telemetry import env

ROW_NUMBER_COLUMN = "rowNum"
DERIVED_COLUMN = "timeValue"
DEFAULT_HISTORY_LIMIT = 100


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Reserved column names plus the undo history depth."""

    row_number_column: str = ROW_NUMBER_COLUMN
    derived_column: str = DERIVED_COLUMN
    history_limit: int = DEFAULT_HISTORY_LIMIT

    def __post_init__(self) -> None:
        if self.history_limit <= 0:
            raise ValueError("history_limit must be positive")
        if not self.row_number_column or not self.derived_column:
            raise ValueError("reserved column names cannot be empty")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        raw_limit = env("HISTORY_LIMIT")
        try:
            limit = int(raw_limit) if raw_limit else DEFAULT_HISTORY_LIMIT
        except ValueError as exc:
            raise ValueError(
                f"SHEET_ENGINE_HISTORY_LIMIT must be an integer, got {raw_limit!r}"
            ) from exc
        return cls(
            row_number_column=env("ROW_NUMBER_COLUMN") or ROW_NUMBER_COLUMN,
            derived_column=env("DERIVED_COLUMN") or DERIVED_COLUMN,
            history_limit=limit,
        )


__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "DERIVED_COLUMN",
    "EngineConfig",
    "ROW_NUMBER_COLUMN",
]
