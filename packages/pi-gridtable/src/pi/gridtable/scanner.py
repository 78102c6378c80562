"""Document scanner: finds pipe tables outside code fences and converts them.

The scan is a single forward pass with an index cursor and two states:

- ``NORMAL``: fence openers switch to ``IN_FENCE``; a recognised table block
  is replaced by its grid rendering; every other line passes through.
- ``IN_FENCE``: every line passes through until a closing fence of the same
  marker character and at least the opening length.

A table block is a pipe row, a separator row with the same indent and column
count, and one or more further rows with the same indent and column count.
Anything looser is left alone.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from pi.gridtable.config import GridTableConfig
from pi.gridtable.layout import column_widths
from pi.gridtable.parser import parse_alignment_row, parse_row
from pi.gridtable.render import render_grid_table
from pi.gridtable.types import ConversionResult, FenceState, Table, TableBlock

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^\s*(`{3,}|~{3,})")


class ScanState(Enum):
    NORMAL = "normal"
    IN_FENCE = "in_fence"


def open_fence(line: str) -> FenceState | None:
    """Return the fence opened by *line* (``` or ~~~, 3+ long), if any."""
    match = _FENCE_OPEN_RE.match(line)
    if match is None:
        return None
    marker = match.group(1)
    return FenceState(marker_char=marker[0], marker_length=len(marker))


def closes_fence(line: str, fence: FenceState) -> bool:
    """True if *line* is a bare run of the fence marker, at least as long."""
    trimmed = line.strip()
    if not trimmed.startswith(fence.marker_char):
        return False
    count = len(trimmed) - len(trimmed.lstrip(fence.marker_char))
    rest = trimmed[count:].strip()
    return count >= fence.marker_length and not rest


def find_table(lines: list[str], start: int) -> tuple[Table, int] | None:
    """Detect a table block at *start*; return it with the index after it."""
    header = parse_row(lines[start])
    if header is None or start + 1 >= len(lines):
        return None

    weights = parse_alignment_row(lines[start + 1], len(header.cells), header.indent)
    if weights is None:
        return None

    rows: list[list[str]] = []
    cursor = start + 2
    while cursor < len(lines):
        row = parse_row(lines[cursor])
        if row is None or row.indent != header.indent or len(row.cells) != len(header.cells):
            break
        rows.append(row.cells)
        cursor += 1

    if not rows:
        return None

    table = Table(indent=header.indent, header=header.cells, rows=rows, weights=weights)
    return table, cursor


def try_convert_table(
    lines: list[str],
    start: int,
    config: GridTableConfig,
) -> TableBlock | None:
    """Convert the table block starting at *start*, if there is one."""
    found = find_table(lines, start)
    if found is None:
        return None

    table, end = found
    rendered = render_grid_table(table, column_widths(table, config))
    logger.debug(
        "Converted table at line %d: %d columns, %d body rows",
        start + 1,
        table.column_count,
        len(table.rows),
    )
    return TableBlock(start=start, end=end, lines=rendered)


def convert_lines(lines: list[str], config: GridTableConfig) -> tuple[list[str], bool, int]:
    """Scan *lines*, returning (output lines, changed, tables converted)."""
    output: list[str] = []
    state = ScanState.NORMAL
    fence: FenceState | None = None
    changed = False
    tables = 0
    index = 0

    while index < len(lines):
        line = lines[index]

        if state is ScanState.IN_FENCE and fence is not None:
            output.append(line)
            if closes_fence(line, fence):
                state, fence = ScanState.NORMAL, None
            index += 1
            continue

        opened = open_fence(line)
        if opened is not None:
            output.append(line)
            state, fence = ScanState.IN_FENCE, opened
            index += 1
            continue

        block = try_convert_table(lines, index, config)
        if block is not None:
            output.extend(block.lines)
            if block.lines != lines[block.start:block.end]:
                changed = True
            tables += 1
            index = block.end
            continue

        output.append(line)
        index += 1

    return output, changed, tables


def convert_tables(content: str, config: GridTableConfig | None = None) -> ConversionResult:
    """Convert every pipe table in *content* to a grid table.

    The line ending style (CRLF if any ``\\r\\n`` is present, else LF) and
    the presence of a final line terminator are preserved.
    """
    if config is None:
        config = GridTableConfig()

    eol = "\r\n" if "\r\n" in content else "\n"
    has_final_eol = content.endswith("\n")
    lines = content.replace("\r\n", "\n").split("\n")
    if has_final_eol:
        # split() leaves an empty item after the final terminator
        lines.pop()

    output, changed, tables = convert_lines(lines, config)

    result = eol.join(output)
    if has_final_eol:
        result += eol
    return ConversionResult(content=result, changed=changed, tables=tables)
