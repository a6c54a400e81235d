"""JSON export of the decoded document. Values are raw; no calibration is applied."""
from __future__ import annotations

import json
import math
import struct
from pathlib import Path

from mlg_core.model import DataBlock, Document, LoggerField, MeasurementBlock

JSON_KW = {"separators": (",", ":"), "ensure_ascii": False, "allow_nan": False}


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else None


def f32_shortest(value: float) -> float | None:
    """Shortest decimal that still round-trips to the same single-precision value."""
    if not math.isfinite(value):
        return None
    packed = struct.pack(">f", value)
    for digits in range(1, 10):
        candidate = float(f"{value:.{digits}g}")
        if struct.pack(">f", candidate) == packed:
            return candidate
    return value


def field_to_dict(field: LoggerField) -> dict:
    return {
        "fieldType": int(field.field_type),
        "name": field.name,
        "units": field.units,
        "displayStyle": field.display_style.label,
        "scale": f32_shortest(field.scale),
        "transform": f32_shortest(field.transform),
        "digits": field.digits,
    }


def block_to_dict(block: DataBlock) -> dict:
    out = {"timestamp": block.timestamp, "type": block.block_type.label}
    if isinstance(block, MeasurementBlock):
        for name, value in block.records.items():
            out[name] = _finite(value)
    else:
        out["message"] = block.message
    return out


def to_dict(doc: Document) -> dict:
    h = doc.header
    return {
        "fileFormat": h.file_format,
        "formatVersion": h.format_version,
        "timestamp": h.timestamp,
        "infoDataStart": h.info_data_start,
        "dataBeginIndex": h.data_begin_index,
        "recordLength": h.record_length,
        "numLoggerFields": h.num_logger_fields,
        "fields": [field_to_dict(f) for f in doc.fields],
        "bitFieldNames": doc.bit_field_names,
        "infoData": doc.info_data,
        "dataBlocks": [block_to_dict(b) for b in doc.blocks],
    }


def dumps(doc: Document) -> str:
    return json.dumps(to_dict(doc), **JSON_KW)


def write_json(doc: Document, path: Path) -> None:
    Path(path).write_text(dumps(doc), encoding="utf-8")
