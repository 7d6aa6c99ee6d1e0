"""
hashlex - Lexical Analyzer Command-Line Interface
=================================================

Scans one source file and prints its tokens, statistics, identifier symbol
table and any lexical errors.

Usage Examples
--------------
Basic scan:
    $ hashlex program.hl

Errors and statistics only:
    $ hashlex --no-tokens program.hl

Machine-readable output:
    $ hashlex --format json program.hl

Non-nesting multi-line comments:
    $ hashlex --flat-comments program.hl

Exit Codes
----------
0 - Success, no lexical errors
1 - Scan completed with lexical errors
2 - Invalid arguments or unreadable source file
3 - Internal error
"""

import logging
import sys
from pathlib import Path

import click

from hashlex import __version__
from hashlex.cli.errors import ExitCode, handle_cli_exception
from hashlex.config import ScannerOptions
from hashlex.lexer import scan_file
from hashlex.report import format_json, format_report

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
        force=True,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "source_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text)",
)
@click.option(
    "--tokens/--no-tokens",
    default=True,
    help="Print the token listing (default: on)",
)
@click.option(
    "--stats/--no-stats",
    default=True,
    help="Print token and comment statistics (default: on)",
)
@click.option(
    "--symbols/--no-symbols",
    default=True,
    help="Print the identifier symbol table (default: on)",
)
@click.option(
    "--flat-comments",
    is_flag=True,
    help="Treat #* *# comments as non-nesting (close at the first *#)",
)
@click.option(
    "--ascii-quotes-only",
    is_flag=True,
    help="Do not accept ’ (U+2019) as a character literal quote",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging on stderr)",
)
@click.version_option(version=__version__, prog_name="hashlex")
def main(
    source_file: Path,
    output_format: str,
    tokens: bool,
    stats: bool,
    symbols: bool,
    flat_comments: bool,
    ascii_quotes_only: bool,
    verbose: bool,
) -> None:
    """
    Scan a source file and report its tokens and lexical errors.

    SOURCE_FILE is read as UTF-8 text.

    \b
    Examples:
        hashlex program.hl                  # Tokens, stats, symbols, errors
        hashlex --no-tokens program.hl      # Summary only
        hashlex -f json program.hl          # JSON document
        hashlex --flat-comments program.hl  # Non-nesting #* *# comments

    Scanner defaults can also be set through the environment variables
    HASHLEX_NESTED_COMMENTS, HASHLEX_TYPOGRAPHIC_QUOTE and
    HASHLEX_PREVIEW_LENGTH; command-line flags take precedence.
    """
    setup_logging(verbose)

    try:
        options = ScannerOptions.from_env()
        if flat_comments:
            options.nested_comments = False
        if ascii_quotes_only:
            options.allow_typographic_quote = False

        logger.info(f"Scanning {source_file}")
        logger.debug(f"Options: {options}")

        result = scan_file(source_file, options)

        if output_format.lower() == "json":
            click.echo(format_json(result))
        else:
            click.echo(format_report(
                result,
                show_tokens=tokens,
                show_statistics=stats,
                show_symbols=symbols,
            ))

        if result.has_errors():
            logger.info(f"{result.errors.error_count()} lexical errors in {source_file}")
            sys.exit(ExitCode.LEXICAL_ERRORS)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
