"""Tab-delimited export of calibrated measurement values."""
from __future__ import annotations

import math
from decimal import Decimal
from pathlib import Path

import pandas as pd

from mlg_core.model import Document, LoggerField
from mlg_core.protocol import DisplayStyle


def plain_number(value: float) -> str:
    """Shortest decimal text for value, never in exponent form ("30", "0.5", "0.0000001")."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def format_cell(field: LoggerField, raw: float) -> str:
    value = field.calibrate(raw)
    if field.display_style is not DisplayStyle.FLOAT or not math.isfinite(value):
        return plain_number(value)
    return f"{value:.{max(field.digits, 0)}f}"


def to_frame(doc: Document) -> pd.DataFrame:
    """Units row followed by one row per measurement block; markers have no row."""
    names = [f.name for f in doc.fields]
    rows = [[f.units for f in doc.fields]]
    for block in doc.measurements:
        rows.append([format_cell(f, block.records[f.name]) for f in doc.fields])
    return pd.DataFrame(rows, columns=names, dtype=object)


def write_table(doc: Document, path: Path) -> None:
    to_frame(doc).to_csv(path, sep="\t", index=False, lineterminator="\n", encoding="utf-8")
