"""pi-gridtable: rewrite Markdown pipe tables as grid tables."""

from pi.gridtable.config import (
    DEFAULT_FIXED_COLUMN_MARGIN,
    DEFAULT_TARGET_INNER_WIDTH,
    GridTableConfig,
)
from pi.gridtable.layout import Column, allocate, column_widths
from pi.gridtable.parser import escape_cell, parse_alignment_row, parse_row
from pi.gridtable.render import render_grid_table
from pi.gridtable.scanner import convert_tables
from pi.gridtable.types import ConversionResult, FenceState, PipeRow, Table
from pi.gridtable.width import display_width, pad_to_width
from pi.gridtable.wrap import wrap_text

__all__ = [
    "Column",
    "ConversionResult",
    "DEFAULT_FIXED_COLUMN_MARGIN",
    "DEFAULT_TARGET_INNER_WIDTH",
    "FenceState",
    "GridTableConfig",
    "PipeRow",
    "Table",
    "allocate",
    "column_widths",
    "convert_tables",
    "display_width",
    "escape_cell",
    "pad_to_width",
    "parse_alignment_row",
    "parse_row",
    "render_grid_table",
    "wrap_text",
]
