"""
Scanner (Token Stream Builder)
==============================

The Scanner drives a single forward pass over the source:

    whitespace / comments  ->  skipped through the Cursor
    anything else          ->  all matchers -> select_candidate()
                                   winner    -> Token
                                   no winner -> literal failure or recover()
                                                -> diagnostic, skip the text

Lexical errors never stop the scan (except an unclosed multi-line comment,
which consumes the rest of the input). The token stream always ends with
exactly one EOF token.

Example Usage
-------------
>>> from hashlex.lexer import scan
>>> result = scan("start\\ndeclare X\\nfinish")
>>> for token in result.tokens:
...     print(token)
<KEYWORD, "start", Line: 1, Col: 1>
<KEYWORD, "declare", Line: 2, Col: 1>
<IDENTIFIER, "X", Line: 2, Col: 9>
<KEYWORD, "finish", Line: 3, Col: 1>
<EOF, "EOF", Line: 3, Col: 7>
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union
import logging

from hashlex.config import ScannerOptions
from hashlex.errors import Diagnostic, ErrorHandler, SourceReadError
from hashlex.lexer.comments import skip_comment
from hashlex.lexer.cursor import Cursor
from hashlex.lexer.matchers import build_matchers, run_matchers, select_candidate
from hashlex.lexer.recovery import recover
from hashlex.lexer.tokens import (
    EOF_LEXEME,
    WHITESPACE,
    LexFailure,
    Token,
    TokenKind,
)
from hashlex.symbols import SymbolTable

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Scan Results
# =============================================================================

@dataclass
class ScanStatistics:
    """
    Counters gathered during a scan.

    Attributes:
        token_counts: Number of tokens per TokenKind (EOF included)
        comments_removed: Single- and multi-line comments skipped
        lines_processed: Highest line number reached by any token
    """
    token_counts: Counter = field(default_factory=Counter)
    comments_removed: int = 0
    lines_processed: int = 1

    @property
    def total_tokens(self) -> int:
        return sum(self.token_counts.values())

    def count(self, kind: TokenKind) -> int:
        return self.token_counts.get(kind, 0)

    def to_dict(self) -> dict:
        """Return a JSON-serializable representation."""
        return {
            "total_tokens": self.total_tokens,
            "lines_processed": self.lines_processed,
            "comments_removed": self.comments_removed,
            "token_counts": {
                kind.name: self.token_counts[kind]
                for kind in TokenKind
                if self.token_counts.get(kind)
            },
        }


@dataclass
class ScanResult:
    """
    Everything produced by one scan.

    Attributes:
        tokens: Tokens in source order, ending with the EOF token
        errors: Diagnostics reported during the scan
        symbols: Identifier symbol table
        statistics: Token and comment counters
        filename: Name of the scanned source
    """
    tokens: list[Token]
    errors: ErrorHandler
    symbols: SymbolTable
    statistics: ScanStatistics
    filename: str = "<input>"

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self.errors.errors

    def has_errors(self) -> bool:
        return self.errors.has_errors()

    def significant_tokens(self) -> list[Token]:
        """All tokens except the EOF sentinel."""
        return [t for t in self.tokens if not t.is_eof()]


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Converts source text into tokens, collecting diagnostics on the way.

    Usage:
        scanner = Scanner(source_text, "program.hl")
        result = scanner.scan()

    Every call to tokenize() or scan() starts again from the beginning of the
    source with fresh statistics. An error handler or symbol table passed by
    the caller is never cleared and accumulates across scans; the ones the
    Scanner creates itself are replaced at the start of each scan.

    Attributes:
        source: The source text being scanned
        filename: Name of the source (for reporting)
        options: ScannerOptions in effect
        errors: Receives diagnostics
        symbols: Receives accepted identifiers
        statistics: Counters for the most recent scan
    """

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        options: Optional[ScannerOptions] = None,
        errors: Optional[ErrorHandler] = None,
        symbols: Optional[SymbolTable] = None,
    ):
        self.source = source
        self.filename = filename
        self.options = options or ScannerOptions()
        self.errors = errors if errors is not None else ErrorHandler()
        self.symbols = symbols if symbols is not None else SymbolTable()
        self._owns_errors = errors is None
        self._owns_symbols = symbols is None
        self.statistics = ScanStatistics()

        self._matchers = build_matchers(self.options.allow_typographic_quote)

    def scan(self) -> ScanResult:
        """
        Scan the whole source.

        Returns:
            ScanResult with tokens, diagnostics, symbols and statistics
        """
        tokens = list(self.tokenize())
        return ScanResult(
            tokens=tokens,
            errors=self.errors,
            symbols=self.symbols,
            statistics=self.statistics,
            filename=self.filename,
        )

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source.

        Yields:
            Token objects in source order; the last one is always EOF
        """
        cursor = Cursor(self.source)
        self.statistics = ScanStatistics()
        if self._owns_errors:
            self.errors = ErrorHandler()
        if self._owns_symbols:
            self.symbols = SymbolTable()
        errors_before = self.errors.error_count()

        while not cursor.at_end():
            # Whitespace
            if cursor.peek() in WHITESPACE:
                cursor.advance(self._whitespace_length(cursor.offset))
                continue

            # Comments
            span = skip_comment(
                cursor,
                self.errors,
                nested=self.options.nested_comments,
                preview_length=self.options.preview_length,
            )
            if span is not None:
                self.statistics.comments_removed += 1
                if not span.closed:
                    diagnostic = self.errors.errors[-1]
                    logger.debug(f"{diagnostic.location(self.filename)}: {diagnostic}")
                    if diagnostic.kind.is_terminal:
                        break
                continue

            token = self._scan_token(cursor)
            if token is not None:
                yield self._emit(token)

        yield self._emit(Token(TokenKind.EOF, EOF_LEXEME, cursor.line, cursor.column))

        logger.debug(
            f"Scanned {self.filename}: {self.statistics.total_tokens} tokens, "
            f"{self.errors.error_count() - errors_before} errors, "
            f"{self.statistics.comments_removed} comments"
        )

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _whitespace_length(self, offset: int) -> int:
        end = offset
        while end < len(self.source) and self.source[end] in WHITESPACE:
            end += 1
        return end - offset

    def _scan_token(self, cursor: Cursor) -> Optional[Token]:
        """
        Scan the token at the cursor.

        Returns:
            The Token, or None if the text was reported and skipped
        """
        line, column = cursor.position
        candidates, failures = run_matchers(self.source, cursor.offset, self._matchers)

        winner = select_candidate(candidates)
        if winner is not None:
            lexeme = cursor.advance(winner.length)
            return Token(winner.kind, lexeme, line, column)

        if failures:
            self._report(cursor, failures[0])
        else:
            self._report(cursor, recover(self.source, cursor.offset))
        return None

    def _report(self, cursor: Cursor, failure: LexFailure) -> None:
        """Report a failure at its anchor and skip to its resume offset."""
        cursor.advance_to(failure.anchor)
        line, column = cursor.position
        diagnostic = self.errors.report(
            failure.kind, line, column, failure.lexeme, failure.reason
        )
        logger.debug(f"{diagnostic.location(self.filename)}: {diagnostic}")
        cursor.advance_to(failure.resume)

    def _emit(self, token: Token) -> Token:
        """Count the token and forward identifiers to the symbol table."""
        self.statistics.token_counts[token.kind] += 1
        self.statistics.lines_processed = max(self.statistics.lines_processed, token.line)
        if token.kind is TokenKind.IDENTIFIER:
            self.symbols.record_identifier(token.lexeme, token.line, token.column)
        return token


# =============================================================================
# Convenience Functions
# =============================================================================

def scan(
    source: str,
    filename: str = "<input>",
    options: Optional[ScannerOptions] = None,
) -> ScanResult:
    """
    Scan source text with a fresh error handler and symbol table.

    Args:
        source: Source text
        filename: Name used in reports
        options: Scanner options (defaults if None)

    Returns:
        ScanResult for the source
    """
    return Scanner(source, filename, options).scan()


def read_source(path: Union[str, Path]) -> str:
    """
    Load a source file as UTF-8 text.

    Raises:
        SourceReadError: If the file is missing, unreadable or not UTF-8
    """
    path = Path(path)
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceReadError(str(path), f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise SourceReadError(str(path), e.strerror or str(e)) from e


def scan_file(path: Union[str, Path], options: Optional[ScannerOptions] = None) -> ScanResult:
    """
    Load and scan a source file.

    Raises:
        SourceReadError: If the file cannot be loaded
    """
    source = read_source(path)
    logger.debug(f"Loaded {path} ({len(source)} characters)")
    return scan(source, str(path), options)
