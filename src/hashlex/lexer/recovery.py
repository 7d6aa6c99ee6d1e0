"""
Error Recovery
==============

Used when no matcher claims the text at the current position. Recovery
decides how much text to skip and how to describe it:

- A run starting with a letter, digit or underscore is consumed up to the
  next whitespace, operator, punctuator or '#', and reported as one problem.
  Numeric-looking runs with a decimal point are MALFORMED_LITERAL (too many
  fractional digits, several decimal points, ...); anything else is
  INVALID_TOKEN.
- Any other character is reported on its own as INVALID_CHARACTER.

Either way at least one character is consumed, so the scan always advances.
"""

from hashlex.errors import DiagnosticKind
from hashlex.lexer.tokens import (
    DELIMITERS,
    MAX_FRACTION_DIGITS,
    LexFailure,
    is_ascii_digit,
    is_word_char,
)


def starts_word_run(char: str) -> bool:
    """Return True if char begins a word-like error run."""
    return is_word_char(char) or char == " "


def word_run_end(source: str, offset: int) -> int:
    """Offset of the first delimiter at or after offset (at least offset + 1)."""
    end = offset
    while end < len(source) and source[end] not in DELIMITERS:
        end += 1
    return max(end, offset + 1)


def _leading_digits(text: str) -> int:
    count = 0
    for char in text:
        if not is_ascii_digit(char):
            break
        count += 1
    return count


def classify_run(run: str) -> tuple[DiagnosticKind, str]:
    """
    Classify an unrecognized word-like run.

    Returns:
        (diagnostic kind, reason)
    """
    if is_ascii_digit(run[0]) and "." in run:
        if run.count(".") > 1:
            return DiagnosticKind.MALFORMED_LITERAL, "numeric literal has multiple decimal points"

        fraction = run.split(".", 1)[1]
        digits = _leading_digits(fraction)
        if digits > MAX_FRACTION_DIGITS:
            return (
                DiagnosticKind.MALFORMED_LITERAL,
                f"float literal has {digits} fractional digits (maximum {MAX_FRACTION_DIGITS})",
            )
        if digits == 0:
            return (
                DiagnosticKind.MALFORMED_LITERAL,
                "float literal needs at least one digit after the decimal point",
            )
        return DiagnosticKind.MALFORMED_LITERAL, "malformed float literal"

    if run[0].islower() and all(is_word_char(c) for c in run):
        return DiagnosticKind.INVALID_TOKEN, "identifiers must start with an uppercase letter"

    return DiagnosticKind.INVALID_TOKEN, "unrecognized token"


def recover(source: str, offset: int) -> LexFailure:
    """
    Describe and delimit the unrecognized text at offset.

    Args:
        source: Full source text
        offset: Position where no matcher succeeded

    Returns:
        LexFailure whose resume offset is past the reported text
    """
    char = source[offset]

    if starts_word_run(char):
        end = word_run_end(source, offset)
        run = source[offset:end]
        kind, reason = classify_run(run)
        return LexFailure(kind, reason, run, offset, end)

    return LexFailure(
        DiagnosticKind.INVALID_CHARACTER,
        f"no token starts with '{char}' (U+{ord(char):04X})",
        char,
        offset,
        offset + 1,
    )
