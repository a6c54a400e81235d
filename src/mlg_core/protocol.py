"""MLG protocol constants.

Single source of truth for on-disk magic values, record layouts and the
closed code tables used by the decoder and both encoders.
Keep this file stable. Decoder and encoders must remain synchronized.
"""
from __future__ import annotations

from enum import Enum, IntEnum

# File magic and version
MAGIC = "MLVLG"
MAGIC_LEN = 6
VERSION = 1

# Header: [Magic(6) | Ver(2) | Timestamp(4) | InfoStart(2) | DataBegin(4) | RecLen(2) | NumFields(2)] = 22 bytes
HEADER_LEN = 22

# Logger field: [Type(1) | Name(34) | Units(10) | Style(1) | Scale(4) | Transform(4) | Digits(1)] = 55 bytes
FIELD_NAME_LEN = 34
FIELD_UNITS_LEN = 10
LOGGER_FIELD_LEN = 55

# Block prefix: [Type(1) | Counter(1) | Timestamp(2)] = 4 bytes
BLOCK_PREFIX_LEN = 4
MARKER_MESSAGE_LEN = 50
CRC_LEN = 1

# All multi-byte scalars are big-endian.
BYTE_ORDER = ">"


class BlockType(IntEnum):
    FIELD = 0
    MARKER = 1

    @property
    def label(self) -> str:
        return "field" if self is BlockType.FIELD else "marker"


class FieldType(IntEnum):
    """Per-field scalar encoding inside a measurement block."""

    U8 = 0
    S8 = 1
    U16 = 2
    S16 = 3
    U32 = 4
    S32 = 5
    S64 = 6
    F32 = 7
    BITS_U8 = 10
    BITS_U16 = 11
    BITS_U32 = 12

    @property
    def struct_code(self) -> str:
        return _FIELD_STRUCT_CODES[self]


_FIELD_STRUCT_CODES = {
    FieldType.U8: "B",
    FieldType.S8: "b",
    FieldType.U16: "H",
    FieldType.S16: "h",
    FieldType.U32: "I",
    FieldType.S32: "i",
    FieldType.S64: "q",
    FieldType.F32: "f",
    FieldType.BITS_U8: "B",
    FieldType.BITS_U16: "H",
    FieldType.BITS_U32: "I",
}


class DisplayStyle(Enum):
    FLOAT = (0, "Float")
    HEX = (1, "Hex")
    BITS = (2, "bits")
    DATE = (3, "Date")
    ON_OFF = (4, "On/Off")
    YES_NO = (5, "Yes/No")
    HIGH_LOW = (6, "High/Low")
    ACTIVE_INACTIVE = (7, "Active/Inactive")

    def __init__(self, code: int, label: str):
        self.code = code
        self.label = label

    @classmethod
    def from_code(cls, code: int) -> "DisplayStyle | None":
        for style in cls:
            if style.code == code:
                return style
        return None
