"""MLG Core - binary decoding and the shared document model."""
from .decoder import decode_document, read_document
from .errors import DecodeError, MLGError
from .model import Document, FileHeader, LoggerField, MarkerBlock, MeasurementBlock

__all__ = [
    "decode_document",
    "read_document",
    "DecodeError",
    "MLGError",
    "Document",
    "FileHeader",
    "LoggerField",
    "MarkerBlock",
    "MeasurementBlock",
]
