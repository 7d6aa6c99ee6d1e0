"""
hashlex Lexer
=============

The tokenization engine: converts source text into classified tokens while
reporting lexical errors instead of stopping at the first one.

Pipeline
--------
    Source -> Cursor (whitespace, comments) -> Matchers -> select_candidate
           -> Token stream (+ EOF)
                          \\-> no winner -> recovery -> diagnostics

Modules
-------
- tokens: TokenKind, Token, Category priorities, language vocabulary
- cursor: line/column tracking
- comments: ## and nested #* *# comments
- literals: string and character literal parsers
- matchers: one matcher per category, float automaton, disambiguation
- recovery: classification and skipping of unrecognized text
- scanner: the driver producing a ScanResult
"""

from hashlex.lexer.tokens import (
    Category,
    LexFailure,
    MatchCandidate,
    Token,
    TokenKind,
)
from hashlex.lexer.cursor import Cursor
from hashlex.lexer.matchers import select_candidate
from hashlex.lexer.scanner import (
    ScanResult,
    ScanStatistics,
    Scanner,
    read_source,
    scan,
    scan_file,
)

__all__ = [
    "Category",
    "Cursor",
    "LexFailure",
    "MatchCandidate",
    "ScanResult",
    "ScanStatistics",
    "Scanner",
    "Token",
    "TokenKind",
    "read_source",
    "scan",
    "scan_file",
    "select_candidate",
]
