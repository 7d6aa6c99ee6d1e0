"""
Scan Reports
============

Text and JSON renderings of a ScanResult. The scanner itself never prints;
the CLI (or any other caller) picks what to show from here.

Text sections follow this layout:

    <KEYWORD, "start", Line: 1, Col: 1>
    ...

    --- STATISTICS ---
    Total tokens: 12
    Lines processed: 4
    Comments removed: 1

    Token counts:
      KEYWORD: 3
      ...

    --- SYMBOL TABLE ---
    Name                 Type         FirstLine  FirstCol   Freq
    ...
    3 identifiers, 7 occurrences

    --- LEXICAL ERRORS ---
    [ERROR] INVALID_CHARACTER at Line 2, Col 5 | Lexeme: "@" | Reason: ...
    1 error
"""

import json
from typing import Iterable

from hashlex import __version__
from hashlex.errors import ErrorHandler
from hashlex.lexer.scanner import ScanResult, ScanStatistics
from hashlex.lexer.tokens import Token, TokenKind
from hashlex.symbols import SymbolTable


def format_tokens(tokens: Iterable[Token]) -> str:
    """One token per line in <KIND, "lexeme", Line: L, Col: C> form."""
    return "\n".join(str(token) for token in tokens)


def format_statistics(statistics: ScanStatistics) -> str:
    lines = [
        "--- STATISTICS ---",
        f"Total tokens: {statistics.total_tokens}",
        f"Lines processed: {statistics.lines_processed}",
        f"Comments removed: {statistics.comments_removed}",
        "",
        "Token counts:",
    ]
    for kind in TokenKind:
        count = statistics.count(kind)
        if count > 0:
            lines.append(f"  {kind.name}: {count}")
    return "\n".join(lines)


def format_symbol_table(symbols: SymbolTable) -> str:
    """Fixed-width table of identifiers in first-sighting order."""
    lines = [
        "--- SYMBOL TABLE ---",
        f"{'Name':<20} {'Type':<12} {'FirstLine':<10} {'FirstCol':<10} {'Freq':<10}".rstrip(),
    ]
    for entry in symbols:
        lines.append(
            f"{entry.name:<20} {entry.kind:<12} {entry.first_line:<10} "
            f"{entry.first_column:<10} {entry.occurrences:<10}".rstrip()
        )
    lines.append(f"{len(symbols)} identifiers, {symbols.total_occurrences()} occurrences")
    return "\n".join(lines)


def format_diagnostics(errors: ErrorHandler) -> str:
    """Diagnostics in encounter order followed by the error count."""
    return "--- LEXICAL ERRORS ---\n" + errors.report_text()


def format_report(
    result: ScanResult,
    show_tokens: bool = True,
    show_statistics: bool = True,
    show_symbols: bool = True,
) -> str:
    """
    Render the selected sections of a scan as text.

    The error section is always included when there are diagnostics.

    Args:
        result: The scan to report
        show_tokens: Include the token listing
        show_statistics: Include the statistics block
        show_symbols: Include the symbol table

    Returns:
        The report, sections separated by blank lines
    """
    sections = []
    if show_tokens:
        sections.append(format_tokens(result.tokens))
    if show_statistics:
        sections.append(format_statistics(result.statistics))
    if show_symbols:
        sections.append(format_symbol_table(result.symbols))
    if result.has_errors():
        sections.append(format_diagnostics(result.errors))
    return "\n\n".join(sections)


def to_json_dict(result: ScanResult) -> dict:
    """Return the whole scan as a JSON-serializable dictionary."""
    return {
        "version": __version__,
        "filename": result.filename,
        "tokens": [token.to_dict() for token in result.tokens],
        "diagnostics": [d.to_dict() for d in result.diagnostics],
        "symbols": [entry.to_dict() for entry in result.symbols],
        "statistics": result.statistics.to_dict(),
    }


def format_json(result: ScanResult, indent: int = 2) -> str:
    return json.dumps(to_json_dict(result), indent=indent, ensure_ascii=False)
