"""
Position Tracking
=================

The Cursor is the only place where line and column numbers change. Tokens,
whitespace, comments and error runs are all consumed through Cursor.advance(),
so line/column accounting is identical on every path through the scanner.

Line breaks: "\\n", a bare "\\r", and the pair "\\r\\n" each count as exactly
one break, even when the "\\r" and "\\n" are consumed by separate calls.
"""


class Cursor:
    """
    Forward-only position in a source string.

    Attributes:
        source: The full source text
        offset: Index of the next unconsumed character
        line: Current line (1-indexed)
        column: Current column (1-indexed)
    """

    def __init__(self, source: str):
        self.source = source
        self.offset = 0
        self.line = 1
        self.column = 1

        # True when the last consumed character was a bare "\r"
        self._after_cr = False

    def at_end(self) -> bool:
        """Check if the whole source has been consumed."""
        return self.offset >= len(self.source)

    def peek(self, ahead: int = 0) -> str:
        """
        Look at the character at offset + ahead without consuming it.

        Returns empty string past the end of the source.
        """
        pos = self.offset + ahead
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    @property
    def position(self) -> tuple[int, int]:
        """The current (line, column) pair."""
        return self.line, self.column

    def advance(self, count: int) -> str:
        """
        Consume the next count characters.

        Args:
            count: Number of characters to consume (clamped to the input end)

        Returns:
            The consumed text
        """
        text = self.source[self.offset:self.offset + count]
        self.advance_by(text)
        return text

    def advance_by(self, text: str) -> None:
        """
        Move past text, which must be the next unconsumed part of the source.

        Args:
            text: The literal text being consumed
        """
        for char in text:
            if char == "\n":
                # Second half of "\r\n" was already counted by the "\r"
                if not self._after_cr:
                    self.line += 1
                    self.column = 1
                self._after_cr = False
            elif char == "\r":
                self.line += 1
                self.column = 1
                self._after_cr = True
            else:
                self.column += 1
                self._after_cr = False
        self.offset += len(text)

    def advance_to(self, offset: int) -> str:
        """Consume everything up to (not including) offset."""
        return self.advance(max(0, offset - self.offset))
