"""MLG - command line tool for MLG log files."""
from __future__ import annotations

import time
from pathlib import Path

import click

from mlg_convert.batch import WRITERS, convert_files


@click.group()
def main() -> None:
    """Command line tool for MLG files."""


@main.command("convert")
@click.argument("fmt", metavar="FORMAT", type=click.Choice(sorted(WRITERS)))
@click.argument("paths", metavar="PATH...", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--fail-fast", is_flag=True, help="Stop at the first file that fails to convert")
def convert_cmd(fmt: str, paths: tuple[Path, ...], fail_fast: bool) -> None:
    """Converts MLG files to FORMAT (csv or json), written next to each input."""
    started = time.perf_counter()

    results = convert_files(paths, fmt, fail_fast=fail_fast)
    for r in results:
        if r.ok:
            click.echo(f"Generated: {r.output}")
        else:
            click.echo(f"Error in [{r.path}]: {r.error}")

    click.echo(f"Finished in: {time.perf_counter() - started:.2f}s")

    # Fail closed: any failed file makes the run fail.
    if not all(r.ok for r in results):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
