"""Core type definitions for pi-gridtable."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

# One positive weight per column, taken from the dash count of the separator row.
AlignmentSpec = list[int]


@dataclass
class PipeRow:
    """A single ``| a | b |`` line split into its indent and trimmed cells."""

    indent: str
    cells: list[str]


@dataclass
class Table:
    """A pipe table block: header, body rows and the separator-row weights."""

    indent: str
    header: list[str]
    rows: list[list[str]] = field(default_factory=list)
    weights: AlignmentSpec = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.header)


@dataclass(frozen=True)
class FenceState:
    """The open code fence the scanner is currently inside."""

    marker_char: Literal["`", "~"]
    marker_length: int


@dataclass
class TableBlock:
    start: int
    end: int  # exclusive
    lines: list[str]


@dataclass
class ConversionResult:
    content: str
    changed: bool
    tables: int = 0
