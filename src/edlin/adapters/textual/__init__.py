"""Textual front-end for the editor (``pip install edlin[tui]``)."""

from .controller import TextualEdlinAdapter, TextualUIHooks

__all__ = ["TextualEdlinAdapter", "TextualUIHooks"]
