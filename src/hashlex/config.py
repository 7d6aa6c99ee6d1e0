"""
hashlex Scanner Configuration
=============================

Scanner options and the ways they can be supplied:
- Default values (defined here)
- Environment variables (ScannerOptions.from_env)
- Command-line flags (applied on top by the CLI)

The lexical limits of the language (31-character identifiers, 6 fractional
digits) are fixed by the grammar and live in hashlex.lexer.tokens.
"""

from dataclasses import dataclass
import os

from hashlex.errors import OptionsError


# Values accepted as "false" for boolean environment variables
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ScannerOptions:
    """
    Scanner configuration options.

    Attributes:
        nested_comments: Multi-line comments nest (#* #* *# *# is one comment).
                         When False, a comment closes at the first *#.
        allow_typographic_quote: Accept the right single quotation mark (U+2019)
                                 as a character literal quote.
        preview_length: Maximum lexeme length shown for an unclosed
                        multi-line comment diagnostic.
    """
    nested_comments: bool = True
    allow_typographic_quote: bool = True
    preview_length: int = 20

    def __post_init__(self):
        if self.preview_length < 1:
            raise OptionsError(
                f"preview_length must be at least 1, got {self.preview_length}"
            )

    @classmethod
    def from_env(cls) -> "ScannerOptions":
        """
        Create ScannerOptions from environment variables.

        Environment variables (all optional):
            HASHLEX_NESTED_COMMENTS: "0", "false", "no" or "off" disables nesting
            HASHLEX_TYPOGRAPHIC_QUOTE: same values disable the U+2019 quote
            HASHLEX_PREVIEW_LENGTH: Positive integer

        Returns:
            ScannerOptions with values from environment variables
        """
        options = cls()

        if nested := os.environ.get("HASHLEX_NESTED_COMMENTS"):
            options.nested_comments = nested.strip().lower() not in _FALSE_VALUES

        if quote := os.environ.get("HASHLEX_TYPOGRAPHIC_QUOTE"):
            options.allow_typographic_quote = quote.strip().lower() not in _FALSE_VALUES

        if preview := os.environ.get("HASHLEX_PREVIEW_LENGTH"):
            try:
                length = int(preview)
            except ValueError:
                length = 0
            if length >= 1:
                options.preview_length = length

        return options
