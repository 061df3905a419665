"""The resident document: an owned list of lines plus a cursor."""

from .document import LineBuffer
from .validation import ensure_range

__all__ = ["LineBuffer", "ensure_range"]
