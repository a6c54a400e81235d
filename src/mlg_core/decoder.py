"""MLG decoding: header, logger-field table, text sections and the data-block stream."""
from __future__ import annotations

import struct
from collections import Counter
from pathlib import Path
from warnings import warn

from mlg_core.cursor import ByteCursor
from mlg_core.errors import (
    CorruptLayout,
    InputReadError,
    UnsupportedBlockType,
    UnsupportedDisplayStyle,
    UnsupportedFieldType,
    UnsupportedFormat,
    UnsupportedVersion,
)
from mlg_core.model import (
    DataBlock,
    Document,
    FileHeader,
    LoggerField,
    MarkerBlock,
    MeasurementBlock,
)
from mlg_core.protocol import (
    BYTE_ORDER,
    CRC_LEN,
    FIELD_NAME_LEN,
    FIELD_UNITS_LEN,
    LOGGER_FIELD_LEN,
    MAGIC,
    MAGIC_LEN,
    MARKER_MESSAGE_LEN,
    VERSION,
    BlockType,
    DisplayStyle,
)


def decode_header(cur: ByteCursor) -> FileHeader:
    """Read the fixed header. Magic and version are checked as soon as they are read."""
    magic = cur.raw(MAGIC_LEN)
    if magic.strip(b"\x00") != MAGIC.encode("ascii"):
        raise UnsupportedFormat(repr(magic))
    file_format = MAGIC

    version = cur.i16()
    if version != VERSION:
        raise UnsupportedVersion(str(version))

    return FileHeader(
        file_format=file_format,
        format_version=version,
        timestamp=cur.i32(),
        info_data_start=cur.i16(),
        data_begin_index=cur.i32(),
        record_length=cur.i16(),
        num_logger_fields=cur.i16(),
    )


def _decode_field(cur: ByteCursor) -> LoggerField:
    start = cur.offset
    type_code = cur.i8()
    name = cur.text(FIELD_NAME_LEN)
    units = cur.text(FIELD_UNITS_LEN)
    style_code = cur.i8()

    style = DisplayStyle.from_code(style_code)
    if style is None:
        raise UnsupportedDisplayStyle(f"code {style_code} for field {name!r} at offset {start}")

    return LoggerField(
        field_type=type_code,
        name=name,
        units=units,
        display_style=style,
        scale=cur.f32(),
        transform=cur.f32(),
        digits=cur.i8(),
    )


def decode_fields(cur: ByteCursor, header: FileHeader) -> tuple[LoggerField, ...]:
    count = header.num_logger_fields
    if count < 0:
        raise CorruptLayout(f"negative logger field count {count}")

    end = cur.offset + count * LOGGER_FIELD_LEN
    fields = []
    while cur.offset < end:
        fields.append(_decode_field(cur))

    dupes = sorted(name for name, n in Counter(f.name for f in fields).items() if n > 1)
    for name in dupes:
        warn(f"Duplicate logger field name {name!r}; later values overwrite earlier ones")

    return tuple(fields)


def _section_length(start: int, end: int, what: str) -> int:
    length = end - start
    if length < 0:
        raise CorruptLayout(f"{what} would end at {end}, before its start {start}")
    return length


def decode_sections(cur: ByteCursor, header: FileHeader) -> tuple[str, str]:
    """Read the bit-field-names and info text, leaving the cursor at the first block."""
    info_start = header.info_data_start
    data_begin = header.data_begin_index
    for name, off in (("info data start", info_start), ("data begin", data_begin)):
        if off < 0 or off > len(cur):
            raise CorruptLayout(f"{name} offset {off} outside buffer of {len(cur)} bytes")

    bit_field_names = cur.text(_section_length(cur.offset, info_start, "bit field names"))
    cur.jump(info_start)

    info_data = cur.text(_section_length(info_start, data_begin, "info data"))
    cur.jump(data_begin)

    return bit_field_names, info_data


def measurement_layout(fields: tuple[LoggerField, ...]) -> struct.Struct:
    """Struct layout of one measurement payload, CRC excluded."""
    codes = []
    for f in fields:
        if f.kind is None:
            raise UnsupportedFieldType(f"code {f.field_type} for field {f.name!r}")
        codes.append(f.kind.struct_code)
    return struct.Struct(BYTE_ORDER + "".join(codes))


def decode_blocks(cur: ByteCursor, fields: tuple[LoggerField, ...]) -> tuple[DataBlock, ...]:
    # Type codes are only checked once a measurement block needs them.
    layout: struct.Struct | None = None
    blocks: list[DataBlock] = []

    while not cur.at_end:
        start = cur.offset
        block_type = cur.i8()
        counter = cur.i8()
        timestamp = cur.u16()

        if block_type == BlockType.FIELD:
            if layout is None:
                layout = measurement_layout(fields)
            values = cur.unpack(layout)
            # CRC is not validated, only consumed to stay aligned.
            cur.skip(CRC_LEN)
            records = {f.name: float(v) for f, v in zip(fields, values)}
            blocks.append(MeasurementBlock(counter=counter, timestamp=timestamp, records=records))
        elif block_type == BlockType.MARKER:
            message = cur.text(MARKER_MESSAGE_LEN)
            blocks.append(MarkerBlock(counter=counter, timestamp=timestamp, message=message))
        else:
            raise UnsupportedBlockType(f"type {block_type} at offset {start}")

    return tuple(blocks)


def decode_document(buf: bytes) -> Document:
    """Decode a complete MLG buffer. Any error abandons the whole file."""
    cur = ByteCursor(buf)
    header = decode_header(cur)
    fields = decode_fields(cur, header)
    bit_field_names, info_data = decode_sections(cur, header)
    blocks = decode_blocks(cur, fields)

    return Document(
        header=header,
        fields=fields,
        bit_field_names=bit_field_names,
        info_data=info_data,
        blocks=blocks,
    )


def read_document(path: Path) -> Document:
    try:
        buf = Path(path).read_bytes()
    except OSError as e:
        raise InputReadError(f"{path}: {e.strerror or e}") from e
    return decode_document(buf)
