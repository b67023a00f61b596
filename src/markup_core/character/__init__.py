"""Character-level scanning for markup tokenizers."""

from .cursor import CharPredicate, TextCursor

__all__ = [
    "CharPredicate",
    "TextCursor",
]
