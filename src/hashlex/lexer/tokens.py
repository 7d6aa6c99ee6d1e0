"""
Token Definitions
=================

Token kinds, the token record, and the fixed vocabulary of the language.

Lexical Categories
------------------
Each position in the source is offered to one matcher per category. The
categories double as the tie-break ranking used when two matchers consume the
same number of characters (lower value wins):

| Rank | Category              | Token kind      | Example       |
|------|-----------------------|-----------------|---------------|
| 1    | MULTI_CHAR_OPERATOR   | OPERATOR        | ** == +=      |
| 2    | KEYWORD               | KEYWORD         | start loop    |
| 3    | BOOLEAN               | BOOLEAN_LITERAL | true false    |
| 4    | IDENTIFIER            | IDENTIFIER      | Total_2       |
| 5    | FLOAT                 | FLOAT_LITERAL   | 3.14 -2.5e10  |
| 6    | INTEGER               | INT_LITERAL     | 42 -7         |
| 7    | STRING                | STRING_LITERAL  | "hi\\n"       |
| 8    | CHAR                  | CHAR_LITERAL    | 'a' '\\t'     |
| 9    | SINGLE_CHAR_OPERATOR  | OPERATOR        | + < !         |
| 10   | PUNCTUATOR            | PUNCTUATOR      | ( ; :         |
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto

from hashlex.errors import DiagnosticKind


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Classification of a token, as printed in token listings."""

    KEYWORD = auto()
    IDENTIFIER = auto()
    INT_LITERAL = auto()
    FLOAT_LITERAL = auto()
    STRING_LITERAL = auto()
    CHAR_LITERAL = auto()
    BOOLEAN_LITERAL = auto()
    OPERATOR = auto()
    PUNCTUATOR = auto()
    EOF = auto()            # End of input sentinel


# =============================================================================
# Matcher Categories (priority order)
# =============================================================================

class Category(IntEnum):
    """
    Lexical categories in tie-break order.

    The integer value is the priority: when candidates have equal length,
    the one with the smallest value wins.
    """

    MULTI_CHAR_OPERATOR = 1
    KEYWORD = 2
    BOOLEAN = 3
    IDENTIFIER = 4
    FLOAT = 5
    INTEGER = 6
    STRING = 7
    CHAR = 8
    SINGLE_CHAR_OPERATOR = 9
    PUNCTUATOR = 10

    @property
    def kind(self) -> TokenKind:
        """The TokenKind produced by this category."""
        return CATEGORY_KINDS[self]


CATEGORY_KINDS: dict[Category, TokenKind] = {
    Category.MULTI_CHAR_OPERATOR: TokenKind.OPERATOR,
    Category.KEYWORD: TokenKind.KEYWORD,
    Category.BOOLEAN: TokenKind.BOOLEAN_LITERAL,
    Category.IDENTIFIER: TokenKind.IDENTIFIER,
    Category.FLOAT: TokenKind.FLOAT_LITERAL,
    Category.INTEGER: TokenKind.INT_LITERAL,
    Category.STRING: TokenKind.STRING_LITERAL,
    Category.CHAR: TokenKind.CHAR_LITERAL,
    Category.SINGLE_CHAR_OPERATOR: TokenKind.OPERATOR,
    Category.PUNCTUATOR: TokenKind.PUNCTUATOR,
}


# =============================================================================
# Language Vocabulary
# =============================================================================

KEYWORDS: frozenset[str] = frozenset({
    "start", "finish", "loop", "condition", "declare", "output", "input",
    "function", "return", "break", "continue", "else",
})

BOOLEANS: frozenset[str] = frozenset({"true", "false"})

# All two-character operators; matched as exact prefixes
MULTI_CHAR_OPERATORS: frozenset[str] = frozenset({
    "**", "==", "!=", "<=", ">=", "&&", "||",
    "++", "--", "+=", "-=", "*=", "/=",
})

SINGLE_CHAR_OPERATORS = "+-*/%<>!="

PUNCTUATORS = "(){}[],;:"

# Characters that may appear in any operator (including & and | from && ||)
OPERATOR_CHARS = SINGLE_CHAR_OPERATORS + "&|"

WHITESPACE = " \t\n\r"

LINE_BREAKS = "\n\r"

# Ends an error-recovery run
DELIMITERS = WHITESPACE + OPERATOR_CHARS + PUNCTUATORS + "#"

# Comment markers
SINGLE_LINE_COMMENT = "##"
MULTI_LINE_COMMENT_OPEN = "#*"
MULTI_LINE_COMMENT_CLOSE = "*#"

# Grammar limits
MAX_IDENTIFIER_LENGTH = 31
MAX_FRACTION_DIGITS = 6

# Character literal quotes: ASCII apostrophe and RIGHT SINGLE QUOTATION MARK
APOSTROPHE = "'"
TYPOGRAPHIC_APOSTROPHE = "’"

# Escape letters accepted after a backslash
STRING_ESCAPES = frozenset('"\\ntr')
CHAR_ESCAPES = frozenset("'\"\\ntr")

EOF_LEXEME = "EOF"


def is_word_char(char: str) -> bool:
    """Return True if char can continue an identifier-like run."""
    return char.isalnum() or char == "_"


def is_ascii_digit(char: str) -> bool:
    """Return True for 0-9 only (str.isdigit also accepts superscripts)."""
    return "0" <= char <= "9"


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A classified, positioned lexeme.

    Attributes:
        kind: The TokenKind classification
        lexeme: Exact source text of the token ("EOF" for the sentinel)
        line: Line number of the first character (1-indexed)
        column: Column number of the first character (1-indexed)
    """
    kind: TokenKind
    lexeme: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as <KIND, "lexeme", Line: L, Col: C>."""
        return f'<{self.kind.name}, "{self.lexeme}", Line: {self.line}, Col: {self.column}>'

    def is_eof(self) -> bool:
        """Return True if this is the end-of-input sentinel."""
        return self.kind is TokenKind.EOF

    def to_dict(self) -> dict:
        """Return a JSON-serializable representation."""
        return {
            "kind": self.kind.name,
            "lexeme": self.lexeme,
            "line": self.line,
            "column": self.column,
        }


@dataclass(frozen=True)
class MatchCandidate:
    """
    A matcher's claim on the text at the current position.

    Candidates are short-lived: they are produced by a matcher and consumed
    immediately by select_candidate().
    """
    category: Category
    length: int

    @property
    def kind(self) -> TokenKind:
        return self.category.kind

    @property
    def priority(self) -> int:
        return int(self.category)


@dataclass(frozen=True)
class LexFailure:
    """
    A matcher's explanation of why the text at the current position is
    malformed.

    Failures are only reported when no matcher produced a candidate. All
    offsets are absolute indexes into the source.

    Attributes:
        kind: Diagnostic classification to report
        reason: Human-readable explanation
        lexeme: Offending text shown in the diagnostic
        anchor: Offset the diagnostic is positioned at
        resume: Offset where scanning continues (always > the start offset)
    """
    kind: DiagnosticKind
    reason: str
    lexeme: str
    anchor: int
    resume: int
