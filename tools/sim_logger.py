"""Synthetic MLG log writer.

Builds byte-exact MLVLG v1 files for demos and tests. Kept independent of the
decoder package so the two can check each other.
"""
import math
import struct
import sys
import uuid
from pathlib import Path

HEADER_FMT = ">6shihihh"       # magic, version, timestamp, info start, data begin, record length, field count
FIELD_FMT = ">b34s10sbffb"      # type, name, units, style, scale, transform, digits
BLOCK_PREFIX_FMT = ">bbH"       # block type, counter, timestamp
MARKER_FMT = ">bbH50s"

# field type code -> struct code
TYPE_CODES = {0: "B", 1: "b", 2: "H", 3: "h", 4: "I", 5: "i", 6: "q", 7: "f", 10: "B", 11: "H", 12: "I"}

STYLE_FLOAT = 0
STYLE_ON_OFF = 4


def field(name, units="", ftype=7, style=STYLE_FLOAT, scale=1.0, transform=0.0, digits=2):
    return {
        "type": ftype,
        "name": name,
        "units": units,
        "style": style,
        "scale": scale,
        "transform": transform,
        "digits": digits,
    }


def pack_field(f):
    return struct.pack(
        FIELD_FMT,
        f["type"],
        f["name"].encode("utf-8"),
        f["units"].encode("utf-8"),
        f["style"],
        f["scale"],
        f["transform"],
        f["digits"],
    )


def measurement_width(fields):
    return struct.calcsize(">" + "".join(TYPE_CODES[f["type"]] for f in fields))


def pack_measurement(fields, counter, timestamp, values, crc=0):
    codes = "".join(TYPE_CODES[f["type"]] for f in fields)
    return struct.pack(BLOCK_PREFIX_FMT + codes + "B", 0, counter, timestamp, *values, crc)


def pack_marker(counter, timestamp, message):
    return struct.pack(MARKER_FMT, 1, counter, timestamp, message.encode("utf-8"))


def build_mlg(
    fields,
    blocks=(),
    bit_field_names=b"",
    info=b"",
    timestamp=1700000000,
    magic=b"MLVLG",
    version=1,
    record_length=None,
):
    """Assemble a complete file from field dicts and already packed blocks."""
    info_start = struct.calcsize(HEADER_FMT) + len(fields) * struct.calcsize(FIELD_FMT) + len(bit_field_names)
    data_begin = info_start + len(info)
    if record_length is None:
        record_length = measurement_width(fields)

    header = struct.pack(
        HEADER_FMT, magic, version, timestamp, info_start, data_begin, record_length, len(fields)
    )
    return b"".join([header, *(pack_field(f) for f in fields), bit_field_names, info, *blocks])


SAMPLE_FIELDS = [
    field("Time", "s", ftype=5, scale=0.001, digits=3),
    field("RPM", "rpm", ftype=2, scale=1.0, digits=0),
    field("MAP", "kPa", ftype=2, scale=0.1, digits=1),
    field("CLT", "C", ftype=3, transform=-400.0, scale=0.1, digits=1),
    field("AFR", "AFR", ftype=0, scale=0.1, digits=2),
    field("Fan", "", ftype=10, style=STYLE_ON_OFF),
]


def generate_session(out_dir, samples=100, marker_every=25):
    """Write one sample log and return its path."""
    sess_id = str(uuid.uuid4())
    path = Path(out_dir) / f"session-{sess_id[:8]}.mlg"
    path.parent.mkdir(parents=True, exist_ok=True)

    blocks = []
    for i in range(samples):
        ts = (i * 10) & 0xFFFF
        values = [
            i * 10,
            int(900 + 2000 * (1 + math.sin(i / 10.0))),
            950 + i,
            1200 + i,
            147,
            1 if i % 20 > 10 else 0,
        ]
        blocks.append(pack_measurement(SAMPLE_FIELDS, i & 0x7F, ts, values))
        if marker_every and i % marker_every == marker_every - 1:
            blocks.append(pack_marker(i & 0x7F, ts, f"Marker {i // marker_every + 1}"))

    path.write_bytes(
        build_mlg(
            SAMPLE_FIELDS,
            blocks,
            info=b'"Firmware : sim"\n"Capture Date : 2026-01-01"\x00',
        )
    )
    print(f"GENERATED: {path}")
    return path


if __name__ == "__main__":
    # Usage: python tools/sim_logger.py OUT_DIR [SAMPLES]
    args = [a for a in sys.argv[1:] if a]
    out = args[0] if len(args) > 0 else "sample_logs"
    samples = int(args[1]) if len(args) > 1 else 100
    generate_session(out, samples=samples)
