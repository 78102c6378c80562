"""Pipe-table row parsing.

A pipe row is ``<indent>| cell | cell |``. The separator row that follows
the header (``| - | -- | :---: |``) is read for its dash counts, which act
as per-column sizing weights rather than alignment.
"""

from __future__ import annotations

import re

from pi.gridtable.types import AlignmentSpec, PipeRow

_ROW_RE = re.compile(r"^(\s*)\|(.*)\|$")
_ALIGNMENT_CELL_RE = re.compile(r"^:?-+:?$")


def split_unescaped_pipes(text: str) -> list[str]:
    """Split *text* on ``|`` delimiters, keeping ``\\|`` as a literal pipe.

    >>> split_unescaped_pipes("a\\\\|b|c")
    ['a|b', 'c']
    """
    segments: list[str] = []
    current: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\" and i + 1 < n and text[i + 1] == "|":
            current.append("|")
            i += 2
            continue
        if ch == "|":
            segments.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    segments.append("".join(current))
    return segments


def parse_row(line: str) -> PipeRow | None:
    """Parse *line* as a pipe-table row, or return None.

    Rows with fewer than two cells are rejected, which keeps stray
    ``| note |`` lines out of table detection.
    """
    match = _ROW_RE.match(line.rstrip())
    if match is None:
        return None

    indent, inside = match.group(1), match.group(2)
    cells = [cell.strip() for cell in split_unescaped_pipes(inside)]
    if len(cells) < 2:
        return None
    return PipeRow(indent=indent, cells=cells)


def parse_alignment_row(
    line: str,
    expected_columns: int,
    expected_indent: str,
) -> AlignmentSpec | None:
    """Parse a separator row and return one weight per column.

    The row must share the header's indent and column count, and each cell
    must look like ``-``, ``:--``, ``---:`` or ``:-:``. The weight is the
    number of dashes, so ``| - | -- | ---- |`` gives ``[1, 2, 4]``.
    """
    row = parse_row(line)
    if row is None or row.indent != expected_indent:
        return None
    if len(row.cells) != expected_columns:
        return None

    weights: AlignmentSpec = []
    for cell in row.cells:
        if not _ALIGNMENT_CELL_RE.match(cell):
            return None
        weights.append(max(1, cell.count("-")))
    return weights


def escape_cell(text: str) -> str:
    """Escape literal pipes so a rendered cell re-parses to the same text."""
    return text.replace("|", "\\|")
