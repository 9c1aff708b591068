"""UI-agnostic copy/paste engine for row-and-column grids."""

__all__ = [
    "adapters",
    "clipboard",
    "config",
    "runtime",
    "session",
    "table",
]

__version__ = "0.1.0"
