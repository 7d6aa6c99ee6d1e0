"""
hashlex Error Hierarchy
=======================

This module defines the exception hierarchy and the diagnostic records used
throughout hashlex.

Two kinds of problems exist and they are handled very differently:

- **Lexical diagnostics** (bad literals, invalid characters, overlong
  identifiers, unclosed comments) are *never raised*. The scanner reports
  them to an ErrorHandler and keeps going, so a single run surfaces every
  problem in the source file.
- **Operational errors** (unreadable file, invalid options) are raised as
  exceptions derived from HashLexError.

Exception Hierarchy
-------------------
HashLexError (base)
├── SourceReadError - source file missing, unreadable or not UTF-8
└── OptionsError - invalid scanner configuration value

Diagnostic Format
-----------------
Every diagnostic prints on a single line:

    [ERROR] KIND at Line L, Col C | Lexeme: "lexeme" | Reason: reason
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HashLexError(Exception):
    """
    Base exception for all hashlex errors.

    Callers can catch every operational failure with a single clause:

        try:
            result = scan_file("program.hl")
        except HashLexError as e:
            print(f"Error: {e}")
    """
    pass


class SourceReadError(HashLexError):
    """
    The source file could not be loaded.

    Raised when the file does not exist, cannot be read, or is not valid
    UTF-8 text.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read '{path}': {reason}")


class OptionsError(HashLexError):
    """Invalid value for a scanner option."""
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in a source file.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column'."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Diagnostics
# =============================================================================

class DiagnosticKind(Enum):
    """
    Classification of lexical diagnostics.

    Only UNCLOSED_MULTILINE_COMMENT ends the scan; every other kind is
    recoverable and the scanner resumes right after the offending text.
    """

    UNCLOSED_MULTILINE_COMMENT = auto()  # #* without matching *# before EOF
    MALFORMED_LITERAL = auto()           # bad string/char/float literal
    INVALID_IDENTIFIER = auto()          # identifier longer than 31 chars
    INVALID_TOKEN = auto()               # unrecognized word-like run
    INVALID_CHARACTER = auto()           # single character outside the grammar

    @property
    def is_terminal(self) -> bool:
        """Return True if the scan cannot continue after this diagnostic."""
        return self is DiagnosticKind.UNCLOSED_MULTILINE_COMMENT


@dataclass(frozen=True)
class Diagnostic:
    """
    A single lexical error record.

    Diagnostics are immutable and kept in the order they were reported.

    Attributes:
        kind: The DiagnosticKind classification
        line: Line of the first offending character (1-indexed)
        column: Column of the first offending character (1-indexed)
        lexeme: The offending source text (possibly partial or truncated)
        reason: Human-readable explanation
    """
    kind: DiagnosticKind
    line: int
    column: int
    lexeme: str
    reason: str

    def __str__(self) -> str:
        return (
            f"[ERROR] {self.kind.name} at Line {self.line}, Col {self.column}"
            f' | Lexeme: "{self.lexeme}" | Reason: {self.reason}'
        )

    def location(self, filename: str = "<input>") -> SourceLocation:
        """Return a SourceLocation for this diagnostic."""
        return SourceLocation(filename, self.line, self.column)

    def to_dict(self) -> dict:
        """Return a JSON-serializable representation."""
        return {
            "kind": self.kind.name,
            "line": self.line,
            "column": self.column,
            "lexeme": self.lexeme,
            "reason": self.reason,
        }


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorHandler:
    """
    Collects lexical diagnostics for batch reporting.

    The scanner reports every problem here instead of raising, so the whole
    file is always scanned and the user sees all errors at once.

    Example:
        errors = ErrorHandler()
        errors.report(DiagnosticKind.INVALID_CHARACTER, 3, 7, "@",
                      "no token starts with this character")

        if errors.has_errors():
            print(errors.report_text())
    """

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def report(
        self,
        kind: DiagnosticKind,
        line: int,
        column: int,
        lexeme: str,
        reason: str,
    ) -> Diagnostic:
        """
        Record a diagnostic.

        Args:
            kind: Diagnostic classification
            line: Line of the offending text
            column: Column of the offending text
            lexeme: The offending text
            reason: Explanation of the problem

        Returns:
            The Diagnostic that was recorded
        """
        diagnostic = Diagnostic(kind, line, column, lexeme, reason)
        self._diagnostics.append(diagnostic)
        return diagnostic

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        """All diagnostics in the order they were reported."""
        return tuple(self._diagnostics)

    def has_errors(self) -> bool:
        """Return True if any diagnostics have been collected."""
        return len(self._diagnostics) > 0

    def error_count(self) -> int:
        """Return the number of collected diagnostics."""
        return len(self._diagnostics)

    def by_kind(self) -> Counter:
        """Return the number of diagnostics per DiagnosticKind."""
        return Counter(d.kind for d in self._diagnostics)

    def first(self, kind: Optional[DiagnosticKind] = None) -> Optional[Diagnostic]:
        """Return the first diagnostic (optionally of a given kind), or None."""
        for diagnostic in self._diagnostics:
            if kind is None or diagnostic.kind is kind:
                return diagnostic
        return None

    def report_text(self) -> str:
        """
        Format all diagnostics for display.

        Returns:
            One line per diagnostic followed by a summary line
        """
        lines = [str(d) for d in self._diagnostics]
        error_word = "error" if len(self._diagnostics) == 1 else "errors"
        lines.append(f"{len(self._diagnostics)} {error_word}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Remove all collected diagnostics."""
        self._diagnostics.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
