import struct

import pytest

from mlg_core.cursor import ByteCursor
from mlg_core.decoder import decode_document, decode_header, read_document
from mlg_core.errors import (
    CorruptLayout,
    InputReadError,
    UnexpectedEndOfData,
    UnsupportedBlockType,
    UnsupportedDisplayStyle,
    UnsupportedFieldType,
    UnsupportedFormat,
    UnsupportedVersion,
)
from mlg_core.model import MarkerBlock, MeasurementBlock
from mlg_core.protocol import MAGIC_LEN, DisplayStyle, FieldType


def patch(buf: bytes, offset: int, fmt: str, value) -> bytes:
    b = bytearray(buf)
    struct.pack_into(fmt, b, offset, value)
    return bytes(b)


def test_decodes_header_fields_and_sections(sample_bytes):
    doc = decode_document(sample_bytes)
    h = doc.header

    assert h.file_format == "MLVLG"
    assert h.format_version == 1
    assert h.timestamp == 1700000000
    assert h.num_logger_fields == 3
    assert h.info_data_start <= h.data_begin_index <= len(sample_bytes)

    assert [f.name for f in doc.fields] == ["RPM", "Lambda", "Fan"]
    rpm, lam, fan = doc.fields
    assert rpm.kind is FieldType.U16
    assert rpm.units == "rpm"
    assert lam.kind is FieldType.F32
    assert lam.scale == 2.0 and lam.transform == 5.0 and lam.digits == 1
    assert fan.kind is FieldType.BITS_U8
    assert fan.display_style is DisplayStyle.ON_OFF

    assert doc.bit_field_names == "bits"
    assert doc.info_data == "Firmware : sim"


def test_decodes_block_stream_in_file_order(sample_bytes):
    doc = decode_document(sample_bytes)

    assert [type(b) for b in doc.blocks] == [MeasurementBlock, MarkerBlock, MeasurementBlock]
    first, marker, last = doc.blocks
    assert first.timestamp == 100
    assert first.records == {"RPM": 1234.0, "Lambda": 10.0, "Fan": 1.0}
    assert marker.counter == 1
    assert marker.message == "Lap 1"
    # Non-zero CRC byte is consumed without validation.
    assert last.records["RPM"] == 5000.0
    assert len(doc.measurements) == 2
    assert len(doc.markers) == 1


def test_every_field_type_width(sim):
    codes = [0, 1, 2, 3, 4, 5, 6, 7, 10, 11, 12]
    fields = [sim.field(f"f{c}", ftype=c) for c in codes]
    values = [200, -5, 60000, -2000, 4000000000, -100000, -(2**40), 1.5, 7, 513, 65537]
    buf = sim.build_mlg(fields, [sim.pack_measurement(fields, 0, 0, values)])

    doc = decode_document(buf)
    assert list(doc.blocks[0].records.values()) == [float(v) for v in values]


def test_empty_block_stream(sim, sample_fields):
    doc = decode_document(sim.build_mlg(sample_fields))
    assert doc.blocks == ()


def test_bad_magic_stops_after_marker(sample_bytes):
    buf = b"MLXLG\x00" + sample_bytes[MAGIC_LEN:]
    cur = ByteCursor(buf)
    with pytest.raises(UnsupportedFormat):
        decode_header(cur)
    assert cur.offset == MAGIC_LEN


def test_non_text_magic_is_unsupported_format(sample_bytes):
    with pytest.raises(UnsupportedFormat):
        decode_document(b"\x89PNG\r\n" + sample_bytes[MAGIC_LEN:])


def test_bad_version(sample_bytes):
    with pytest.raises(UnsupportedVersion):
        decode_document(patch(sample_bytes, 6, ">h", 2))


def test_field_count_beyond_buffer(sim, sample_fields):
    buf = sim.build_mlg(sample_fields[:1])
    with pytest.raises(UnexpectedEndOfData):
        decode_document(patch(buf, 20, ">h", 3))


def test_negative_field_count(sample_bytes):
    with pytest.raises(CorruptLayout):
        decode_document(patch(sample_bytes, 20, ">h", -1))


def test_unknown_display_style(sim):
    with pytest.raises(UnsupportedDisplayStyle):
        decode_document(sim.build_mlg([sim.field("X", style=8)]))


def test_unknown_field_type_fails_on_measurement(sim):
    buf = sim.build_mlg([sim.field("X", ftype=8)], [b"\x00\x00\x00\x01\x2a\x00"], record_length=0)
    with pytest.raises(UnsupportedFieldType):
        decode_document(buf)


def test_unknown_field_type_without_measurements(sim):
    fields = [sim.field("X", ftype=8)]
    buf = sim.build_mlg(fields, [sim.pack_marker(0, 5, "only marker")], record_length=0)
    doc = decode_document(buf)
    assert doc.fields[0].field_type == 8
    assert doc.fields[0].kind is None
    assert doc.blocks == (MarkerBlock(counter=0, timestamp=5, message="only marker"),)


def test_info_offset_outside_buffer(sample_bytes):
    with pytest.raises(CorruptLayout):
        decode_document(patch(sample_bytes, 12, ">h", 30000))


def test_info_offset_inside_field_table(sample_bytes):
    with pytest.raises(CorruptLayout):
        decode_document(patch(sample_bytes, 12, ">h", 40))


def test_data_begin_before_info(sample_bytes):
    doc = decode_document(sample_bytes)
    with pytest.raises(CorruptLayout):
        decode_document(patch(sample_bytes, 14, ">i", doc.header.info_data_start - 1))


def test_unknown_block_type(sample_bytes):
    with pytest.raises(UnsupportedBlockType):
        decode_document(sample_bytes + b"\x02\x00\x00\x01")


def test_truncated_final_block(sample_bytes):
    # Dropping the CRC byte leaves an incomplete last measurement.
    with pytest.raises(UnexpectedEndOfData):
        decode_document(sample_bytes[:-1])


def test_truncated_marker(sim, sample_fields):
    buf = sim.build_mlg(sample_fields, [sim.pack_marker(0, 0, "cut")[:20]])
    with pytest.raises(UnexpectedEndOfData):
        decode_document(buf)


def test_duplicate_field_names_warn(sim):
    fields = [sim.field("A", ftype=0), sim.field("A", ftype=0)]
    buf = sim.build_mlg(fields, [sim.pack_measurement(fields, 0, 0, [1, 2])])
    with pytest.warns(UserWarning, match="Duplicate logger field name"):
        doc = decode_document(buf)
    assert doc.blocks[0].records == {"A": 2.0}


def test_read_document_missing_file(tmp_path):
    with pytest.raises(InputReadError):
        read_document(tmp_path / "nope.mlg")
