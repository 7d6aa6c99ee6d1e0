"""
hashlex - Error-Tolerant Lexer for a Small Teaching Language
============================================================

This package implements the lexical analysis stage of a toy compiler. It
turns source text into classified tokens, keeps scanning after malformed
input, and reports every lexical error with its exact line and column.

The Language at a Glance
------------------------
    ## single-line comment
    #* multi-line comments #* can nest *# *#
    start
        declare Count
        Count = 10
        loop (Count > 0) { output "tick\\n"; Count -= 1; }
        Ratio = 2.5e3
        Flag = true
        Letter = 'a'
    finish

- Keywords: start finish loop condition declare output input function
  return break continue else
- Identifiers: an uppercase letter followed by up to 30 lowercase letters,
  digits or underscores
- Literals: integers, floats (at most 6 fractional digits, optional
  exponent), "strings", 'c' characters, true/false
- Operators: ** == != <= >= && || ++ -- += -= *= /= + - * / % < > ! =
- Punctuators: ( ) { } [ ] , ; :

Main Components
---------------
- **lexer**: the tokenization engine (Scanner, scan, scan_file)
- **symbols**: identifier symbol table
- **errors**: diagnostics and the error handler
- **report**: text and JSON output
- **cli**: the ``hashlex`` command

Quick Start
-----------
    >>> from hashlex import scan
    >>> result = scan("declare X\\nX = 1.5")
    >>> [t.kind.name for t in result.tokens]
    ['KEYWORD', 'IDENTIFIER', 'IDENTIFIER', 'OPERATOR', 'FLOAT_LITERAL', 'EOF']
    >>> result.has_errors()
    False

Or from the command line:
    $ hashlex program.hl
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hashlex.config import ScannerOptions
from hashlex.errors import (
    Diagnostic,
    DiagnosticKind,
    ErrorHandler,
    HashLexError,
    OptionsError,
    SourceLocation,
    SourceReadError,
)
from hashlex.lexer import (
    ScanResult,
    ScanStatistics,
    Scanner,
    Token,
    TokenKind,
    read_source,
    scan,
    scan_file,
)
from hashlex.symbols import IdentifierRecord, SymbolTable

__all__ = [
    "__version__",
    # Scanning
    "Scanner",
    "ScanResult",
    "ScanStatistics",
    "ScannerOptions",
    "Token",
    "TokenKind",
    "read_source",
    "scan",
    "scan_file",
    # Symbols
    "IdentifierRecord",
    "SymbolTable",
    # Errors and diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "ErrorHandler",
    "HashLexError",
    "OptionsError",
    "SourceLocation",
    "SourceReadError",
]
