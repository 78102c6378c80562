"""Column width allocation for grid tables.

Columns whose separator cell has a single dash are *fixed*: they get the
width of their widest cell plus a safety margin, so they never wrap.
Columns with two or more dashes are *flexible*: after the fixed columns are
sized, the remaining width up to the target is shared among them in
proportion to their dash counts. A flexible column never gets narrower than
its header, so headers stay on one line.

All widths here are inner widths (without the one-space padding on each
side of a cell).
"""

from __future__ import annotations

from dataclasses import dataclass

from pi.gridtable.config import GridTableConfig
from pi.gridtable.parser import escape_cell
from pi.gridtable.types import Table
from pi.gridtable.width import display_width

MIN_RENDERED_WIDTH = 3


@dataclass
class Column:
    """Sizing inputs for one table column."""

    index: int
    weight: int
    content_width: int
    header_width: int

    @property
    def is_fixed(self) -> bool:
        return self.weight == 1


def cell_width(text: str) -> int:
    """Single-line display width of a cell as it will be rendered (min 1)."""
    return max(display_width(escape_cell(text.strip())), 1)


def build_columns(table: Table) -> list[Column]:
    """Derive per-column weights and content widths from *table*."""
    columns: list[Column] = []
    for index, header in enumerate(table.header):
        weight = table.weights[index] if index < len(table.weights) else 1
        content_width = cell_width(header)
        for row in table.rows:
            value = row[index] if index < len(row) else ""
            content_width = max(content_width, cell_width(value))
        columns.append(
            Column(
                index=index,
                weight=max(weight, 1),
                content_width=content_width,
                header_width=cell_width(header),
            )
        )
    return columns


def allocate(weights: list[int], min_widths: list[int], total_width: int) -> list[int]:
    """Distribute *total_width* across columns by weight (largest remainder).

    Every column first receives its minimum. The surplus up to
    *total_width* is split in proportion to *weights*; integer floors are
    handed out first, then the leftover units go one at a time to the
    columns with the largest fractional remainder, breaking ties by larger
    weight and then by lower index.

    Example: weights ``[2, 4]``, minimums ``[10, 12]``, total 40 gives
    ``[16, 24]``.
    """
    if not weights:
        return []

    safe_weights = [max(1, w) for w in weights]
    safe_mins = [max(1, w) for w in min_widths]
    min_total = sum(safe_mins)
    total_weight = sum(safe_weights)
    additional = max(total_width, min_total) - min_total

    # Exact shares: floor and remainder over the common denominator total_weight.
    shares = [divmod(additional * w, total_weight) for w in safe_weights]
    widths = [m + floor for m, (floor, _) in zip(safe_mins, shares)]
    leftover = additional - sum(floor for floor, _ in shares)

    if leftover > 0:
        order = sorted(
            range(len(safe_weights)),
            key=lambda i: (-shares[i][1], -safe_weights[i], i),
        )
        cursor = 0
        while leftover > 0:
            widths[order[cursor % len(order)]] += 1
            leftover -= 1
            cursor += 1

    return widths


def inner_widths(columns: list[Column], config: GridTableConfig) -> list[int]:
    """Compute the final inner width of every column."""
    margin = config.fixed_column_margin
    target = config.target_inner_width
    fixed = [c for c in columns if c.is_fixed]
    flexible = [c for c in columns if not c.is_fixed]

    if not flexible:
        # All fixed: keep each minimum and spread the rest evenly to reach the target.
        return allocate(
            [1] * len(columns),
            [c.content_width + margin for c in columns],
            target,
        )

    widths = [1] * len(columns)
    for col in fixed:
        widths[col.index] = col.content_width + margin

    fixed_total = sum(widths[c.index] for c in fixed)
    flex_mins = [c.header_width for c in flexible]
    effective_target = max(target, fixed_total + sum(flex_mins))
    flex_widths = allocate(
        [c.weight for c in flexible],
        flex_mins,
        effective_target - fixed_total,
    )
    for col, width in zip(flexible, flex_widths):
        widths[col.index] = width
    return widths


def column_widths(table: Table, config: GridTableConfig) -> list[int]:
    """Rendered column widths (inner width plus padding) for *table*."""
    return [max(w + 2, MIN_RENDERED_WIDTH) for w in inner_widths(build_columns(table), config)]
