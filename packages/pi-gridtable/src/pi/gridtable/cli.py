"""CLI entry point for format-grid-table. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from pi.gridtable.config import GridTableConfig
from pi.gridtable.files import DEFAULT_ROOT, FileResult, format_file, resolve_targets

PROG = "format-grid-table"


def _display_path(path: Path) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:
        # different drive on Windows
        return str(path)


@click.command(name=PROG)
@click.argument("files", nargs=-1, type=click.Path())
@click.option("--all", "all_files", is_flag=True, help="Convert every .md file under --root")
@click.option("--root", default=DEFAULT_ROOT, show_default=True, help="Directory searched by --all")
@click.option("--check", is_flag=True, help="Report files that need formatting without writing them")
@click.option(
    "--width",
    type=click.IntRange(min=1),
    default=None,
    help="Target inner table width (overrides GRID_TABLE_TARGET_INNER_WIDTH)",
)
@click.option(
    "--margin",
    type=click.IntRange(min=0),
    default=None,
    help="Fixed column safety margin (overrides GRID_TABLE_FIXED_COLUMN_MARGIN)",
)
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
    show_default=True,
)
def main(files, all_files, root, check, width, margin, log_level):
    """Rewrite Markdown pipe tables in FILES as grid tables."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = GridTableConfig.from_env().with_overrides(
        target_inner_width=width,
        fixed_column_margin=margin,
    )
    targets = resolve_targets(list(files), all_files=all_files, root=root)
    if not targets:
        click.echo(f"{PROG}: target .md files not found.")
        return

    changed: list[FileResult] = []
    failed = False
    for path in targets:
        try:
            result = format_file(path, config, check=check)
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"{PROG}: error: {_display_path(path)}: {e}", err=True)
            failed = True
            continue
        if result.changed:
            changed.append(result)

    prefix = f"{PROG}: needs format" if check else f"{PROG}: formatted"
    for result in changed:
        click.echo(f"{prefix}: {_display_path(result.path)}")

    if failed or (check and changed):
        sys.exit(1)


if __name__ == "__main__":
    main()
