"""Grid table rendering.

Output shape for a two-column table::

    +------+----------+
    | ID   | Name     |
    +======+==========+
    | A1   | 山田太郎 |
    +------+----------+

Cells that do not fit their column are wrapped, and the row grows to as many
physical lines as its tallest cell.
"""

from __future__ import annotations

from pi.gridtable.parser import escape_cell
from pi.gridtable.types import Table
from pi.gridtable.width import pad_to_width
from pi.gridtable.wrap import wrap_text


def border_line(indent: str, widths: list[int], fill: str = "-") -> str:
    """Border such as ``+----+------+``; *fill* is ``-`` or ``=``."""
    return f"{indent}+{'+'.join(fill * w for w in widths)}+"


def row_lines(indent: str, cells: list[str], widths: list[int]) -> list[str]:
    """Render one logical row, possibly spanning several physical lines."""
    inner = [max(w - 2, 1) for w in widths]
    wrapped: list[list[str]] = []
    for col, inner_width in enumerate(inner):
        cell = cells[col] if col < len(cells) else ""
        wrapped.append(wrap_text(escape_cell(cell.strip()), inner_width))

    line_count = max((len(cell_lines) for cell_lines in wrapped), default=1)

    lines: list[str] = []
    for line_idx in range(line_count):
        segments = []
        for cell_lines, inner_width in zip(wrapped, inner):
            value = cell_lines[line_idx] if line_idx < len(cell_lines) else ""
            segments.append(f" {pad_to_width(value, inner_width)} ")
        lines.append(f"{indent}|{'|'.join(segments)}|")
    return lines


def render_grid_table(table: Table, widths: list[int]) -> list[str]:
    """Render *table* as grid table lines using rendered column *widths*."""
    indent = table.indent
    lines = [border_line(indent, widths, "-")]
    lines.extend(row_lines(indent, table.header, widths))
    lines.append(border_line(indent, widths, "="))

    for row in table.rows:
        lines.extend(row_lines(indent, row, widths))
        lines.append(border_line(indent, widths, "-"))

    return lines
