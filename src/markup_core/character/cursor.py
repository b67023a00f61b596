"""Forward-only text cursor for driving markup tokenizers.

A tokenizer recognizes lexical runs (tag names, attribute values, text) by
peeking at and consuming one character at a time, or by consuming whole runs
that satisfy a predicate. The cursor never moves backward and never raises:
running off the end of the buffer is reported as ``None``.

Positions count Unicode code points. Python strings are indexed by code point,
so the single internal offset always lies on a character boundary and every
access is O(1).

Example:
    >>> cursor = TextCursor("div class")
    >>> cursor.consume_while(str.isalpha)
    'div'
    >>> cursor.current_char()
    ' '
"""

from typing import Callable, Optional

CharPredicate = Callable[[str], bool]


class TextCursor:
    """Scanning cursor over an immutable input buffer.

    The cursor is exclusively owned by the tokenizer that created it. Callers
    that need to backtrack snapshot :attr:`position` and build a new cursor
    at that offset.
    """

    def __init__(self, text: str, position: int = 0) -> None:
        """Initialize the cursor.

        Args:
            text: Input buffer, fixed for the cursor's lifetime
            position: Starting offset in code points; may lie past the end
        """
        if position < 0:
            raise ValueError("Cursor position must be >= 0")
        self._text = text
        self._position = position

    @property
    def text(self) -> str:
        """The full input buffer."""
        return self._text

    @property
    def position(self) -> int:
        """Number of code points consumed so far (including past-end advances)."""
        return self._position

    @property
    def remaining(self) -> str:
        """Unconsumed suffix of the buffer; empty once exhausted."""
        return self._text[self._position:]

    def current_char(self) -> Optional[str]:
        """Read the character at the current position without consuming it."""
        if self._position >= len(self._text):
            return None
        return self._text[self._position]

    def starts_with(self, literal: str) -> bool:
        """Return True if the unconsumed input begins with ``literal``.

        The empty string is a prefix of everything, including an exhausted
        cursor.
        """
        return self._text.startswith(literal, self._position) or not literal

    def is_at_end(self) -> bool:
        """Return True if all input is consumed."""
        return self._position >= len(self._text)

    def consume_char(self) -> Optional[str]:
        """Return the current character and advance by one.

        The position advances even past the end; the returned value is then
        ``None``.
        """
        char = self.current_char()
        self._position += 1
        return char

    def consume_while(self, predicate: CharPredicate) -> str:
        """Consume characters while ``predicate`` holds and return them.

        Stops before the first character that fails the predicate, or at the
        end of input.
        """
        start = self._position
        end = start
        length = len(self._text)
        while end < length and predicate(self._text[end]):
            end += 1
        if end == start:
            return ""
        self._position = end
        return self._text[start:end]

    def __repr__(self) -> str:
        return f"TextCursor(position={self._position}, length={len(self._text)})"
