"""Decoded MLG document.

A Document is built in one pass per input file and consumed by exactly one
encoder. Nothing here is mutated after construction.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from mlg_core.protocol import BlockType, DisplayStyle, FieldType


@dataclass(frozen=True)
class FileHeader:
    file_format: str
    format_version: int
    timestamp: int
    info_data_start: int
    data_begin_index: int
    record_length: int
    num_logger_fields: int


@dataclass(frozen=True)
class LoggerField:
    field_type: int
    name: str
    units: str
    display_style: DisplayStyle
    scale: float
    transform: float
    digits: int

    @property
    def kind(self) -> FieldType | None:
        """Scalar encoding for field_type, or None for a code this format does not define."""
        try:
            return FieldType(self.field_type)
        except ValueError:
            return None

    def calibrate(self, raw: float) -> float:
        return (raw + self.transform) * self.scale


@dataclass(frozen=True)
class MeasurementBlock:
    counter: int
    timestamp: int
    records: dict[str, float] = field(default_factory=dict)

    block_type = BlockType.FIELD


@dataclass(frozen=True)
class MarkerBlock:
    counter: int
    timestamp: int
    message: str = ""

    block_type = BlockType.MARKER


DataBlock = Union[MeasurementBlock, MarkerBlock]


@dataclass(frozen=True)
class Document:
    header: FileHeader
    fields: tuple[LoggerField, ...]
    bit_field_names: str
    info_data: str
    blocks: tuple[DataBlock, ...]

    @property
    def measurements(self) -> list[MeasurementBlock]:
        return [b for b in self.blocks if isinstance(b, MeasurementBlock)]

    @property
    def markers(self) -> list[MarkerBlock]:
        return [b for b in self.blocks if isinstance(b, MarkerBlock)]
