"""Display width measurement for table cells.

Grid tables are laid out in monospace columns, so every sizing decision
(column widths, padding, wrapping) uses display width instead of ``len``.
East-Asian Wide and Fullwidth code points (CJK ideographs, kana, Hangul
syllables, fullwidth forms) count as two columns; everything else counts
as one.
"""

from __future__ import annotations

import wcwidth as _wcwidth


def char_width(ch: str) -> int:
    """Return 2 for a wide/fullwidth code point, else 1.

    Zero-width and control characters count as one column.
    """
    return 2 if _wcwidth.wcwidth(ch) == 2 else 1


def display_width(text: str) -> int:
    """Sum the per-code-point width of *text*."""
    if text.isascii():
        return len(text)
    return sum(char_width(ch) for ch in text)


def pad_to_width(text: str, target_width: int) -> str:
    """Right-pad *text* with spaces up to *target_width* columns.

    Text that is already as wide as the target is returned unchanged
    (never truncated).
    """
    width = display_width(text)
    if width >= target_width:
        return text
    return text + " " * (target_width - width)
