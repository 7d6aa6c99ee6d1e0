"""
Category Matchers and Disambiguation
====================================

One matcher per lexical category. Every matcher is a pure function of
``(source, offset)`` that never moves the cursor and returns:

- ``None`` when the category does not apply at offset
- the length of the text it would consume
- a ``LexFailure`` when the text clearly belongs to the category but is
  malformed (literals, overlong identifiers)

select_candidate() then applies longest match, breaking ties by Category
priority. Failures are only looked at when no candidate wins.

Float Automaton
---------------
Float literals are recognized by a small deterministic automaton:

    START --sign--> SIGN --digit--> INT_DIGITS --'.'--> POINT --digit--> FRACTION
    START --digit--> INT_DIGITS     (INT_DIGITS loops on digit)
    FRACTION --digit--> FRACTION --e/E--> EXP_MARK --sign--> EXP_SIGN
    EXP_MARK/EXP_SIGN --digit--> EXP_DIGITS (loops on digit)

Accepting states are FRACTION and EXP_DIGITS. The longest accepted prefix
wins, so "2.5e" yields "2.5" and leaves "e" for the next token.
"""

from enum import Enum, auto
from functools import partial
from typing import Callable, Iterable, Optional, Union

from hashlex.errors import DiagnosticKind
from hashlex.lexer.literals import parse_char, parse_string
from hashlex.lexer.tokens import (
    BOOLEANS,
    KEYWORDS,
    MAX_FRACTION_DIGITS,
    MAX_IDENTIFIER_LENGTH,
    MULTI_CHAR_OPERATORS,
    PUNCTUATORS,
    SINGLE_CHAR_OPERATORS,
    Category,
    LexFailure,
    MatchCandidate,
    is_ascii_digit,
    is_word_char,
)


MatchOutcome = Union[int, LexFailure, None]
Matcher = Callable[[str, int], MatchOutcome]


# =============================================================================
# Fixed-Vocabulary Matchers
# =============================================================================

def match_multi_char_operator(source: str, offset: int) -> Optional[int]:
    """Match one of the two-character operators (**, ==, +=, ...)."""
    if source[offset:offset + 2] in MULTI_CHAR_OPERATORS:
        return 2
    return None


def _at_word_boundary(source: str, offset: int) -> bool:
    return offset >= len(source) or not is_word_char(source[offset])


def _match_word(source: str, offset: int, words: Iterable[str]) -> Optional[int]:
    """Match a whole word from words; 'loopX' does not match 'loop'."""
    for word in words:
        end = offset + len(word)
        if source.startswith(word, offset) and _at_word_boundary(source, end):
            return len(word)
    return None


def match_keyword(source: str, offset: int) -> Optional[int]:
    """Match a reserved word (case-sensitive, whole word)."""
    return _match_word(source, offset, KEYWORDS)


def match_boolean(source: str, offset: int) -> Optional[int]:
    """Match 'true' or 'false' (whole word)."""
    return _match_word(source, offset, BOOLEANS)


def match_single_char_operator(source: str, offset: int) -> Optional[int]:
    if offset < len(source) and source[offset] in SINGLE_CHAR_OPERATORS:
        return 1
    return None


def match_punctuator(source: str, offset: int) -> Optional[int]:
    if offset < len(source) and source[offset] in PUNCTUATORS:
        return 1
    return None


# =============================================================================
# Identifiers
# =============================================================================

def _is_identifier_tail(char: str) -> bool:
    return "a" <= char <= "z" or is_ascii_digit(char) or char == "_"


def match_identifier(source: str, offset: int) -> MatchOutcome:
    """
    Match an identifier: one uppercase letter, then lowercase letters,
    digits or underscores.

    Matching stops at the first character outside that set, so 'HelloWorld'
    matches 'Hello'. A run longer than MAX_IDENTIFIER_LENGTH is a failure,
    never truncated.
    """
    if offset >= len(source) or not ("A" <= source[offset] <= "Z"):
        return None

    end = offset + 1
    while end < len(source) and _is_identifier_tail(source[end]):
        end += 1

    length = end - offset
    if length > MAX_IDENTIFIER_LENGTH:
        return LexFailure(
            DiagnosticKind.INVALID_IDENTIFIER,
            f"identifier is {length} characters long (maximum {MAX_IDENTIFIER_LENGTH})",
            source[offset:end],
            offset,
            end,
        )
    return length


# =============================================================================
# Numeric Literals
# =============================================================================

class FloatState(Enum):
    """States of the float literal automaton."""

    START = auto()
    SIGN = auto()
    INT_DIGITS = auto()
    POINT = auto()
    FRACTION = auto()
    EXP_MARK = auto()
    EXP_SIGN = auto()
    EXP_DIGITS = auto()


FLOAT_ACCEPTING = frozenset({FloatState.FRACTION, FloatState.EXP_DIGITS})


def float_transition(state: FloatState, char: str) -> Optional[FloatState]:
    """
    Transition function of the float automaton.

    Returns:
        The next state, or None if char cannot continue a float
    """
    digit = is_ascii_digit(char)

    if state is FloatState.START:
        if char in "+-":
            return FloatState.SIGN
        return FloatState.INT_DIGITS if digit else None

    if state in (FloatState.SIGN, FloatState.POINT, FloatState.EXP_SIGN):
        if not digit:
            return None
        return {
            FloatState.SIGN: FloatState.INT_DIGITS,
            FloatState.POINT: FloatState.FRACTION,
            FloatState.EXP_SIGN: FloatState.EXP_DIGITS,
        }[state]

    if state is FloatState.INT_DIGITS:
        if digit:
            return FloatState.INT_DIGITS
        return FloatState.POINT if char == "." else None

    if state is FloatState.FRACTION:
        if digit:
            return FloatState.FRACTION
        return FloatState.EXP_MARK if char in "eE" else None

    if state is FloatState.EXP_MARK:
        if char in "+-":
            return FloatState.EXP_SIGN
        return FloatState.EXP_DIGITS if digit else None

    if state is FloatState.EXP_DIGITS:
        return FloatState.EXP_DIGITS if digit else None

    return None


def match_float(source: str, offset: int) -> Optional[int]:
    """
    Match a float literal such as 3.14, -0.5 or 6.02e23.

    The match fails outright (rather than stopping early) when the fraction
    has more than MAX_FRACTION_DIGITS digits or the literal is followed by
    another decimal point, leaving the whole run to error recovery.
    """
    state = FloatState.START
    pos = offset
    accepted_end = None
    fraction_digits = 0

    while pos < len(source):
        next_state = float_transition(state, source[pos])
        if next_state is None:
            break
        if next_state is FloatState.FRACTION:
            fraction_digits += 1
            if fraction_digits > MAX_FRACTION_DIGITS:
                return None
        state = next_state
        pos += 1
        if state in FLOAT_ACCEPTING:
            accepted_end = pos

    if accepted_end is None:
        return None
    if source.startswith(".", accepted_end):
        return None
    return accepted_end - offset


def match_integer(source: str, offset: int) -> Optional[int]:
    """
    Match an integer literal with an optional sign.

    A sign only belongs to the literal when a digit follows it directly.
    Digits followed by '.' are left to the float matcher.
    """
    pos = offset
    if pos < len(source) and source[pos] in "+-":
        pos += 1

    digits_start = pos
    while pos < len(source) and is_ascii_digit(source[pos]):
        pos += 1

    if pos == digits_start:
        return None
    if source.startswith(".", pos):
        return None
    return pos - offset


# =============================================================================
# Matcher Table and Disambiguation
# =============================================================================

def build_matchers(allow_typographic_quote: bool = True) -> tuple[tuple[Category, Matcher], ...]:
    """
    Build the matcher table in priority order.

    Args:
        allow_typographic_quote: Accept ’ as a character literal quote

    Returns:
        (Category, matcher) pairs
    """
    return (
        (Category.MULTI_CHAR_OPERATOR, match_multi_char_operator),
        (Category.KEYWORD, match_keyword),
        (Category.BOOLEAN, match_boolean),
        (Category.IDENTIFIER, match_identifier),
        (Category.FLOAT, match_float),
        (Category.INTEGER, match_integer),
        (Category.STRING, parse_string),
        (Category.CHAR, partial(parse_char, allow_typographic=allow_typographic_quote)),
        (Category.SINGLE_CHAR_OPERATOR, match_single_char_operator),
        (Category.PUNCTUATOR, match_punctuator),
    )


DEFAULT_MATCHERS = build_matchers()


def run_matchers(
    source: str,
    offset: int,
    matchers: Iterable[tuple[Category, Matcher]] = DEFAULT_MATCHERS,
) -> tuple[list[MatchCandidate], list[LexFailure]]:
    """
    Offer the text at offset to every matcher.

    Returns:
        (candidates, failures), each in matcher priority order
    """
    candidates: list[MatchCandidate] = []
    failures: list[LexFailure] = []

    for category, matcher in matchers:
        outcome = matcher(source, offset)
        if outcome is None:
            continue
        if isinstance(outcome, LexFailure):
            failures.append(outcome)
        elif outcome > 0:
            candidates.append(MatchCandidate(category, outcome))

    return candidates, failures


def select_candidate(candidates: Iterable[MatchCandidate]) -> Optional[MatchCandidate]:
    """
    Pick the winning candidate: longest match, then smallest priority value.

    Returns:
        The winner, or None if no candidate has a positive length
    """
    best = None
    for candidate in candidates:
        if candidate.length <= 0:
            continue
        if (
            best is None
            or candidate.length > best.length
            or (candidate.length == best.length and candidate.priority < best.priority)
        ):
            best = candidate
    return best
