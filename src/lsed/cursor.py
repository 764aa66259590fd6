"""
Cursor over script or input text.

A Cursor is a view over an immutable string plus an advancing offset.
Consuming text only moves the offset; the underlying string is never
copied or modified.

Every primitive either succeeds and advances, or fails and leaves the
position where it was. Callers that need to undo a multi-step parse use
mark() / reset().
"""

from typing import Optional


BLANK_CHARS = " \t"


class Cursor:
    """A read position over a string."""

    def __init__(self, text: str, position: int = 0):
        self._text = text
        self._position = min(max(position, 0), len(text))
        self._mark = self._position

    @property
    def text(self) -> str:
        return self._text

    @property
    def position(self) -> int:
        return self._position

    def __len__(self) -> int:
        return len(self._text) - self._position

    def __bool__(self) -> bool:
        return self._position < len(self._text)

    def __str__(self) -> str:
        return self.remaining()

    def __repr__(self) -> str:
        return f"Cursor({self.remaining()!r}, position={self._position})"

    def remaining(self) -> str:
        """Return the unconsumed text."""
        return self._text[self._position:]

    def is_empty(self) -> bool:
        return not self

    def peek(self) -> Optional[str]:
        """Return the next character without consuming it, or None at end."""
        if self.is_empty():
            return None
        return self._text[self._position]

    def mark(self) -> int:
        self._mark = self._position
        return self._mark

    def reset(self, position: Optional[int] = None) -> None:
        """Move back to the last mark, or to an explicit position (clamped to the text)."""
        if position is None:
            position = self._mark
        self._position = min(max(position, 0), len(self._text))

    def skip_blanks(self) -> bool:
        """
        Advance past spaces and tabs.

        Returns:
            True if at least one blank was consumed
        """
        start = self._position
        text = self._text
        end = len(text)
        while self._position < end and text[self._position] in BLANK_CHARS:
            self._position += 1
        return self._position > start

    def skip_chars(self, characters: str) -> bool:
        """Advance past any run of the given characters."""
        start = self._position
        text = self._text
        end = len(text)
        while self._position < end and text[self._position] in characters:
            self._position += 1
        return self._position > start

    def consume_char(self, expected: str) -> bool:
        if self.peek() == expected:
            self._position += 1
            return True
        return False

    def consume_n(self, n: int) -> bool:
        if n < 0 or len(self) < n:
            return False
        self._position += n
        return True

    def take_until(self, delimiter: str) -> str:
        """
        Remove and return everything up to the next delimiter.

        The delimiter itself is consumed but not returned. Without a
        delimiter in the remaining text, the whole remainder is returned
        and the cursor ends up empty.

        Raises:
            ValueError: If delimiter is empty
        """
        if not delimiter:
            raise ValueError("delimiter must not be empty")

        index = self._text.find(delimiter, self._position)
        if index < 0:
            result = self._text[self._position:]
            self._position = len(self._text)
            return result

        result = self._text[self._position:index]
        self._position = index + len(delimiter)
        return result

    def take_line(self) -> str:
        return self.take_until("\n")

    def take_while(self, characters: str) -> str:
        """Remove and return the longest prefix made only of `characters`."""
        start = self._position
        self.skip_chars(characters)
        return self._text[start:self._position]


__all__ = ["Cursor", "BLANK_CHARS"]
