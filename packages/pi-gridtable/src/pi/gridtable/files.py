"""Markdown file discovery and in-place conversion."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pi.gridtable.config import GridTableConfig
from pi.gridtable.scanner import convert_tables

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "mds"
MARKDOWN_SUFFIX = ".md"


@dataclass
class FileResult:
    path: Path
    changed: bool
    written: bool = False
    tables: int = 0


def collect_markdown_files(root: str | Path) -> list[Path]:
    """Recursively collect ``.md`` files under *root*, sorted by path."""
    root = Path(root)
    if not root.is_dir():
        return []
    return sorted(p for p in root.rglob(f"*{MARKDOWN_SUFFIX}") if p.is_file())


def resolve_targets(
    paths: list[str],
    *,
    all_files: bool = False,
    root: str | Path = DEFAULT_ROOT,
) -> list[Path]:
    """Resolve the files a run should process.

    With *all_files*, every Markdown file under *root* is returned and
    *paths* is ignored. Otherwise each path is resolved and kept only if
    it names an existing regular file.
    """
    if all_files:
        return collect_markdown_files(Path(root).resolve())

    targets: list[Path] = []
    for raw in paths:
        path = Path(raw).resolve()
        if not path.is_file():
            logger.warning("Skipping %s: not a file", raw)
            continue
        targets.append(path)
    return targets


def read_document(path: Path) -> str:
    # newline="" keeps CRLF intact so the scanner can detect it
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_document(path: Path, text: str) -> None:
    """Replace *path* with *text* atomically (temp file + ``os.replace``).

    A symlinked *path* stays a link; its target is the file replaced.
    """
    path = Path(path).resolve()
    tmp_fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        if path.exists():
            os.chmod(tmp_path, path.stat().st_mode & 0o7777)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def format_file(path: Path, config: GridTableConfig, *, check: bool = False) -> FileResult:
    """Convert the tables in one file.

    In *check* mode the file is never written; the result only reports
    whether it would change. Read and decode errors propagate and leave the
    file untouched.
    """
    original = read_document(path)
    converted = convert_tables(original, config)
    result = FileResult(path=path, changed=converted.changed, tables=converted.tables)
    if converted.changed and not check:
        write_document(path, converted.content)
        result.written = True
        logger.info("Wrote %s (%d tables)", path, converted.tables)
    return result
