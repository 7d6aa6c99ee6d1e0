"""
String and Character Literal Parsing
====================================

Literal parsers look at the source without moving the cursor and return one
of three outcomes:

- ``None``: no literal starts here (wrong opening character)
- ``int``: a well-formed literal of that many characters
- ``LexFailure``: a malformed literal, with the text to report and the offset
  where scanning should resume

Escape Sequences
----------------
Strings accept \\" \\\\ \\n \\t \\r. Character literals additionally accept \\'.
Any other character after a backslash is an invalid escape. Raw line breaks
are never allowed inside a literal.

Character Literal Quotes
------------------------
Both the ASCII apostrophe (') and the right single quotation mark (’) open a
character literal; the closing quote must be the same character.
"""

from typing import Union

from hashlex.errors import DiagnosticKind
from hashlex.lexer.tokens import (
    APOSTROPHE,
    CHAR_ESCAPES,
    LINE_BREAKS,
    STRING_ESCAPES,
    TYPOGRAPHIC_APOSTROPHE,
    LexFailure,
)


LiteralOutcome = Union[int, LexFailure, None]

# Longest lexeme shown for a character literal that is too long
CHAR_PREVIEW_LENGTH = 4


def _malformed(reason: str, lexeme: str, anchor: int, resume: int) -> LexFailure:
    return LexFailure(DiagnosticKind.MALFORMED_LITERAL, reason, lexeme, anchor, resume)


def _line_end(source: str, pos: int) -> int:
    """Offset of the first line break at or after pos (or the input length)."""
    while pos < len(source) and source[pos] not in LINE_BREAKS:
        pos += 1
    return pos


# =============================================================================
# String Literals
# =============================================================================

def parse_string(source: str, offset: int) -> LiteralOutcome:
    """
    Parse a double-quoted string literal starting at offset.

    Args:
        source: Full source text
        offset: Position of the opening quote

    Returns:
        Literal length (quotes included), a LexFailure, or None
    """
    if not source.startswith('"', offset):
        return None

    pos = offset + 1
    while pos < len(source):
        char = source[pos]

        if char == '"':
            return pos + 1 - offset

        if char in LINE_BREAKS:
            return _malformed(
                "unterminated string literal: line break before closing quote",
                source[offset:pos],
                offset,
                pos,
            )

        if char == "\\":
            if pos + 1 >= len(source):
                break
            escaped = source[pos + 1]
            if escaped in LINE_BREAKS:
                return _malformed(
                    "unterminated string literal: line break before closing quote",
                    source[offset:pos + 1],
                    offset,
                    pos + 1,
                )
            if escaped not in STRING_ESCAPES:
                return _malformed(
                    f"invalid escape sequence '\\{escaped}' in string literal",
                    source[pos:pos + 2],
                    pos,
                    _skip_string_rest(source, pos + 2),
                )
            pos += 2
            continue

        pos += 1

    return _malformed(
        "unterminated string literal: end of input reached",
        source[offset:],
        offset,
        len(source),
    )


def _skip_string_rest(source: str, pos: int) -> int:
    """
    Find where to resume after an invalid escape.

    Returns the offset just past the closing quote, or the line break / end
    of input if the string is never closed.
    """
    while pos < len(source):
        char = source[pos]
        if char == '"':
            return pos + 1
        if char in LINE_BREAKS:
            return pos
        if char == "\\" and pos + 1 < len(source) and source[pos + 1] not in LINE_BREAKS:
            pos += 2
            continue
        pos += 1
    return pos


# =============================================================================
# Character Literals
# =============================================================================

def char_quotes(allow_typographic: bool = True) -> str:
    """Return the characters that open a character literal."""
    return APOSTROPHE + TYPOGRAPHIC_APOSTROPHE if allow_typographic else APOSTROPHE


def parse_char(source: str, offset: int, allow_typographic: bool = True) -> LiteralOutcome:
    """
    Parse a character literal starting at offset.

    A character literal holds exactly one character or one escape pair
    between matching quotes.

    Args:
        source: Full source text
        offset: Position of the opening quote
        allow_typographic: Accept ’ as a quote character

    Returns:
        Literal length (quotes included), a LexFailure, or None
    """
    if offset >= len(source) or source[offset] not in char_quotes(allow_typographic):
        return None

    quote = source[offset]
    pos = offset + 1

    if pos >= len(source):
        return _malformed(
            "unterminated character literal: end of input reached",
            quote, offset, pos,
        )

    char = source[pos]
    if char in LINE_BREAKS:
        return _malformed(
            "unterminated character literal: line break after opening quote",
            quote, offset, pos,
        )
    if char == quote:
        return _malformed("empty character literal", quote * 2, offset, pos + 1)

    if char == "\\":
        if pos + 1 >= len(source):
            return _malformed(
                "unterminated character literal: end of input reached",
                source[offset:], offset, len(source),
            )
        escaped = source[pos + 1]
        if escaped in LINE_BREAKS:
            return _malformed(
                "unterminated character literal: line break before closing quote",
                source[offset:pos + 1], offset, pos + 1,
            )
        if escaped not in CHAR_ESCAPES:
            resume = pos + 2
            if source.startswith(quote, resume):
                resume += 1
            return _malformed(
                f"invalid escape sequence '\\{escaped}' in character literal",
                source[pos:pos + 2], pos, resume,
            )
        pos += 2
    else:
        pos += 1

    # Exactly one logical character read; the closing quote must follow
    if pos >= len(source):
        return _malformed(
            "unterminated character literal: end of input reached",
            source[offset:pos], offset, pos,
        )
    if source[pos] == quote:
        return pos + 1 - offset
    if source[pos] in LINE_BREAKS:
        return _malformed(
            "unterminated character literal: line break before closing quote",
            source[offset:pos], offset, pos,
        )

    line_end = _line_end(source, pos)
    lexeme = source[offset:min(offset + CHAR_PREVIEW_LENGTH, line_end)]
    close = source.find(quote, pos, line_end)
    resume = close + 1 if close != -1 else offset + len(lexeme)
    return _malformed(
        "character literal too long or missing closing quote",
        lexeme, offset, resume,
    )
