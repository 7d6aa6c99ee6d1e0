"""
Identifier Symbol Table
=======================

Records every identifier accepted by the scanner: where it was first seen
and how many times it occurs. Entries keep first-sighting order.

Example:
    >>> table = SymbolTable()
    >>> table.record_identifier("Count", 1, 9).occurrences
    1
    >>> table.record_identifier("Count", 4, 1).occurrences
    2
    >>> table.get("Count").first_line
    1
"""

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass
class IdentifierRecord:
    """
    Symbol table entry for one identifier name.

    Attributes:
        name: The identifier text
        first_line: Line of the first occurrence
        first_column: Column of the first occurrence
        occurrences: Number of times the identifier was seen
        kind: Symbol classification (always "IDENTIFIER" at the lexical stage)
    """
    name: str
    first_line: int
    first_column: int
    occurrences: int = 1
    kind: str = "IDENTIFIER"

    def to_dict(self) -> dict:
        """Return a JSON-serializable representation."""
        return {
            "name": self.name,
            "kind": self.kind,
            "first_line": self.first_line,
            "first_column": self.first_column,
            "occurrences": self.occurrences,
        }


class SymbolTable:
    """Identifier frequency table keyed by name."""

    def __init__(self) -> None:
        self._entries: dict[str, IdentifierRecord] = {}

    def record_identifier(self, name: str, line: int, column: int) -> IdentifierRecord:
        """
        Record one occurrence of an identifier.

        The first occurrence creates the entry; later ones only increment
        its count.

        Returns:
            The entry for name
        """
        entry = self._entries.get(name)
        if entry is None:
            entry = IdentifierRecord(name, line, column)
            self._entries[name] = entry
        else:
            entry.occurrences += 1
        return entry

    def get(self, name: str) -> Optional[IdentifierRecord]:
        return self._entries.get(name)

    def total_occurrences(self) -> int:
        """Total number of identifier tokens recorded."""
        return sum(entry.occurrences for entry in self._entries.values())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[IdentifierRecord]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
