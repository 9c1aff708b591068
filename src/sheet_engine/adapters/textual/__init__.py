"""Textual host integration. ``app`` needs the ``textual`` package."""

from .controller import TextualGridAdapter, TextualUIHooks

__all__ = ["TextualGridAdapter", "TextualUIHooks"]
