"""
hashlex Command-Line Interface
==============================

This package provides the ``hashlex`` command, a Click-based tool that scans
a source file and prints its tokens, statistics, symbol table and lexical
errors.
"""

__all__ = ["hashlex"]
