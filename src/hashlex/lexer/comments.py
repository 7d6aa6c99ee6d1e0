"""
Comment Skipping
================

Comments are discarded before token matching:

- Single-line: ``## text`` runs up to (not including) the next line break.
- Multi-line: ``#* text *#``. By default comments nest, so
  ``#* outer #* inner *# still outer *#`` is one comment. With nesting
  disabled the comment ends at the first ``*#``.

An unclosed multi-line comment swallows the rest of the input and is
reported as UNCLOSED_MULTILINE_COMMENT, which ends the scan.
"""

from dataclasses import dataclass
from typing import Optional

from hashlex.errors import DiagnosticKind, ErrorHandler
from hashlex.lexer.cursor import Cursor
from hashlex.lexer.tokens import (
    LINE_BREAKS,
    MULTI_LINE_COMMENT_CLOSE,
    MULTI_LINE_COMMENT_OPEN,
    SINGLE_LINE_COMMENT,
)


@dataclass(frozen=True)
class CommentSpan:
    """
    Extent of one comment in the source.

    Attributes:
        start: Offset of the opening marker
        end: Offset just past the comment (the input length if unclosed)
        multi_line: True for #* *# comments
        closed: False if the input ended inside a multi-line comment
    """
    start: int
    end: int
    multi_line: bool
    closed: bool = True

    @property
    def length(self) -> int:
        return self.end - self.start


def match_comment(source: str, offset: int, nested: bool = True) -> Optional[CommentSpan]:
    """
    Find the comment starting at offset, if any.

    Args:
        source: Full source text
        offset: Position to examine
        nested: Whether #* *# comments nest

    Returns:
        The CommentSpan, or None if no comment starts at offset
    """
    if source.startswith(MULTI_LINE_COMMENT_OPEN, offset):
        return _match_multi_line(source, offset, nested)

    if source.startswith(SINGLE_LINE_COMMENT, offset):
        pos = offset + len(SINGLE_LINE_COMMENT)
        while pos < len(source) and source[pos] not in LINE_BREAKS:
            pos += 1
        return CommentSpan(offset, pos, multi_line=False)

    return None


def _match_multi_line(source: str, offset: int, nested: bool) -> CommentSpan:
    """Scan a #* *# comment, tracking nesting depth."""
    depth = 1
    pos = offset + len(MULTI_LINE_COMMENT_OPEN)

    while pos < len(source):
        if nested and source.startswith(MULTI_LINE_COMMENT_OPEN, pos):
            depth += 1
            pos += len(MULTI_LINE_COMMENT_OPEN)
            continue

        if source.startswith(MULTI_LINE_COMMENT_CLOSE, pos):
            depth -= 1
            pos += len(MULTI_LINE_COMMENT_CLOSE)
            if depth == 0:
                return CommentSpan(offset, pos, multi_line=True)
            continue

        pos += 1

    return CommentSpan(offset, len(source), multi_line=True, closed=False)


def preview(text: str, length: int) -> str:
    """Truncate text to length characters, marking the cut with '...'."""
    if len(text) <= length:
        return text
    return text[:length] + "..."


def skip_comment(
    cursor: Cursor,
    errors: ErrorHandler,
    nested: bool = True,
    preview_length: int = 20,
) -> Optional[CommentSpan]:
    """
    Skip the comment at the cursor, reporting it if it is never closed.

    Args:
        cursor: Scan position (advanced past the comment)
        errors: Receives the UNCLOSED_MULTILINE_COMMENT diagnostic
        nested: Whether #* *# comments nest
        preview_length: Truncation length for the diagnostic lexeme

    Returns:
        The skipped CommentSpan, or None if no comment starts at the cursor
    """
    span = match_comment(cursor.source, cursor.offset, nested)
    if span is None:
        return None

    line, column = cursor.position
    text = cursor.advance(span.length)

    if not span.closed:
        errors.report(
            DiagnosticKind.UNCLOSED_MULTILINE_COMMENT,
            line,
            column,
            preview(text, preview_length),
            "multi-line comment not closed before end of input",
        )

    return span
