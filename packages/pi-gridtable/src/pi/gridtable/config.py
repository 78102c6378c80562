"""Settings for grid table conversion.

Values are resolved once from the environment and passed into the engine as
an immutable ``GridTableConfig``:

- ``GRID_TABLE_TARGET_INNER_WIDTH``: total inner width a table aims for
  (default 90). Unset, non-numeric or values below 1 fall back to the default.
- ``GRID_TABLE_FIXED_COLUMN_MARGIN``: extra width added to single-dash
  columns (default 2). Unset, non-numeric or negative values fall back to the
  default.

Only the leading integer of a value is read, so "12.5" is 12 and "40px" is 40.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")

DEFAULT_TARGET_INNER_WIDTH = 90
DEFAULT_FIXED_COLUMN_MARGIN = 2

TARGET_WIDTH_ENV = "GRID_TABLE_TARGET_INNER_WIDTH"
FIXED_MARGIN_ENV = "GRID_TABLE_FIXED_COLUMN_MARGIN"


def _read_int(environ: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = environ.get(name)
    if not raw:
        return default
    match = _LEADING_INT_RE.match(raw)
    if match is None:
        logger.debug("Ignoring %s=%r: not a number, using %d", name, raw, default)
        return default
    value = int(match.group(1))
    if value < minimum:
        logger.debug("Ignoring %s=%r: below %d, using %d", name, raw, minimum, default)
        return default
    return value


@dataclass(frozen=True)
class GridTableConfig:
    """Width policy shared by every table in a conversion run."""

    target_inner_width: int = DEFAULT_TARGET_INNER_WIDTH
    fixed_column_margin: int = DEFAULT_FIXED_COLUMN_MARGIN

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GridTableConfig:
        env = os.environ if environ is None else environ
        return cls(
            target_inner_width=_read_int(env, TARGET_WIDTH_ENV, DEFAULT_TARGET_INNER_WIDTH, 1),
            fixed_column_margin=_read_int(env, FIXED_MARGIN_ENV, DEFAULT_FIXED_COLUMN_MARGIN, 0),
        )

    def with_overrides(
        self,
        *,
        target_inner_width: int | None = None,
        fixed_column_margin: int | None = None,
    ) -> GridTableConfig:
        """Return a copy with any explicitly given values replaced."""
        changes: dict[str, int] = {}
        if target_inner_width is not None:
            changes["target_inner_width"] = target_inner_width
        if fixed_column_margin is not None:
            changes["fixed_column_margin"] = fixed_column_margin
        return replace(self, **changes) if changes else self
