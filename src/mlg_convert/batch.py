"""Per-file conversion of MLG logs to csv or json."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from mlg_core.decoder import read_document
from mlg_core.errors import MLGError, OutputWriteError
from mlg_core.model import Document
from mlg_convert.jsonout import write_json
from mlg_convert.tabular import write_table

WRITERS: dict[str, Callable[[Document, Path], None]] = {
    "csv": write_table,
    "json": write_json,
}


@dataclass(frozen=True)
class ConversionResult:
    path: Path
    output: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def output_path(path: Path, fmt: str) -> Path:
    return Path(path).with_suffix(f".{fmt}")


def convert_file(path: Path, fmt: str) -> Path:
    """Decode one file and write it next to the input. Raises MLGError on failure."""
    writer = WRITERS[fmt]
    doc = read_document(path)
    out = output_path(path, fmt)
    try:
        writer(doc, out)
    except OSError as e:
        raise OutputWriteError(f"{out}: {e.strerror or e}") from e
    return out


def convert_files(paths: Iterable[Path], fmt: str, fail_fast: bool = False) -> list[ConversionResult]:
    """Convert every path in order, reporting success or a diagnostic per file.

    With fail_fast the batch stops after the first failed file.
    """
    if fmt not in WRITERS:
        raise ValueError(f"Invalid format: {fmt} (expected one of {', '.join(WRITERS)})")

    results: list[ConversionResult] = []
    for p in paths:
        p = Path(p)
        try:
            out = convert_file(p, fmt)
        except MLGError as e:
            results.append(ConversionResult(path=p, error=e.diagnostic()))
            if fail_fast:
                break
            continue
        results.append(ConversionResult(path=p, output=out))
    return results
