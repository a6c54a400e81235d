"""Bounds-checked big-endian reader over an immutable byte buffer."""
from __future__ import annotations

import struct

from mlg_core.errors import CorruptLayout, InvalidText, UnexpectedEndOfData
from mlg_core.protocol import BYTE_ORDER

_LAYOUTS: dict[str, struct.Struct] = {}


def _scalar_layout(code: str) -> struct.Struct:
    layout = _LAYOUTS.get(code)
    if layout is None:
        layout = _LAYOUTS[code] = struct.Struct(BYTE_ORDER + code)
    return layout


class ByteCursor:
    """Sequential reader that tracks its own offset.

    Every read checks the remaining length first, so a short buffer raises
    UnexpectedEndOfData instead of returning a truncated value.
    """

    def __init__(self, buf: bytes, offset: int = 0):
        self.buf = bytes(buf)
        self.offset = 0
        self.jump(offset)

    def __len__(self) -> int:
        return len(self.buf)

    @property
    def remaining(self) -> int:
        return len(self.buf) - self.offset

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.buf)

    def _take(self, length: int) -> bytes:
        if length < 0:
            raise CorruptLayout(f"negative read length {length} at offset {self.offset}")
        if length > self.remaining:
            raise UnexpectedEndOfData(
                f"need {length} bytes at offset {self.offset}, {self.remaining} left"
            )
        chunk = self.buf[self.offset:self.offset + length]
        self.offset += length
        return chunk

    def unpack(self, layout: struct.Struct) -> tuple:
        """Read a whole precompiled record layout in one step."""
        return layout.unpack(self._take(layout.size))

    def _unpack(self, code: str):
        (value,) = self.unpack(_scalar_layout(code))
        return value

    def u8(self) -> int:
        return self._unpack("B")

    def i8(self) -> int:
        return self._unpack("b")

    def u16(self) -> int:
        return self._unpack("H")

    def i16(self) -> int:
        return self._unpack("h")

    def u32(self) -> int:
        return self._unpack("I")

    def i32(self) -> int:
        return self._unpack("i")

    def u64(self) -> int:
        return self._unpack("Q")

    def i64(self) -> int:
        return self._unpack("q")

    def f32(self) -> float:
        return self._unpack("f")

    def raw(self, length: int) -> bytes:
        return self._take(length)

    def text(self, length: int) -> str:
        """Read fixed-length UTF-8 text with NUL padding trimmed from both ends."""
        start = self.offset
        raw = self._take(length)
        try:
            decoded = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidText(f"{length} bytes at offset {start}: {e.reason}") from e
        return decoded.strip("\x00")

    def skip(self, length: int) -> None:
        self._take(length)

    def jump(self, to: int) -> None:
        if to < 0 or to > len(self.buf):
            raise CorruptLayout(f"jump target {to} outside buffer of {len(self.buf)} bytes")
        self.offset = to
