"""Character-level wrapping of cell text by display width."""

from __future__ import annotations

from pi.gridtable.width import char_width


def wrap_text(text: str, max_width: int) -> list[str]:
    """Wrap *text* into lines no wider than *max_width* columns.

    The column width is a hard limit: text is broken at whatever character
    would overflow, not widened. Leading whitespace of every line is
    dropped and trailing whitespace is stripped.

    >>> wrap_text("abcdefghi", 6)
    ['abcdef', 'ghi']

    Always returns at least one line (``[""]`` for blank text). A
    non-positive width returns the text untouched.
    """
    if max_width <= 0:
        return [text]

    lines: list[str] = []
    current: list[str] = []
    current_width = 0

    for ch in text:
        if current_width == 0 and ch.isspace():
            continue

        ch_width = char_width(ch)
        if current_width > 0 and current_width + ch_width > max_width:
            lines.append("".join(current).rstrip())
            current = []
            current_width = 0
            if ch.isspace():
                continue

        current.append(ch)
        current_width += ch_width

    if current:
        lines.append("".join(current).rstrip())

    return lines or [""]
