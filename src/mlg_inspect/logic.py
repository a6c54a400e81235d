from __future__ import annotations

from pathlib import Path

from mlg_core.decoder import read_document
from mlg_core.errors import ERRORS, MLGError


def _fail(err: MLGError) -> dict:
    errors = [{"code": err.code, "message": ERRORS[err.code], "detail": err.detail}]
    return {"status": "FAIL", "error_count": len(errors), "errors": errors}


def inspect_file(path: Path) -> dict:
    try:
        doc = read_document(Path(path))
    except MLGError as e:
        return _fail(e)

    h = doc.header
    stamps = [b.timestamp for b in doc.blocks]
    summary = {
        "file_format": h.file_format,
        "format_version": h.format_version,
        "timestamp": h.timestamp,
        "record_length": h.record_length,
        "fields": [f.name for f in doc.fields],
        "measurement_blocks": len(doc.measurements),
        "marker_blocks": len(doc.markers),
        "first_timestamp": stamps[0] if stamps else None,
        "last_timestamp": stamps[-1] if stamps else None,
    }
    return {"status": "PASS", "error_count": 0, "errors": [], "summary": summary}
