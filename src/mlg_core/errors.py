"""MLG error taxonomy.

Decode errors are terminal for the file being decoded. I/O errors are a
separate branch so diagnostics never conflate the two.
"""
from __future__ import annotations

ERRORS = {
    "E_UNSUPPORTED_FORMAT": "Unsupported file format",
    "E_UNSUPPORTED_VERSION": "Unsupported file format version",
    "E_CORRUPT_LAYOUT": "Section offsets or lengths are inconsistent",
    "E_UNEXPECTED_EOF": "Unexpected end of data",
    "E_UNSUPPORTED_DISPLAY_STYLE": "Unsupported field display style",
    "E_UNSUPPORTED_FIELD_TYPE": "Unsupported field type",
    "E_UNSUPPORTED_BLOCK_TYPE": "Unsupported block type",
    "E_INVALID_TEXT": "Text field is not valid UTF-8",
    "E_INPUT_READ": "Unable to read input file",
    "E_OUTPUT_WRITE": "Unable to write output file",
}


class MLGError(ValueError):
    code = "E_MLG"

    def __init__(self, detail: str = ""):
        self.detail = detail
        message = ERRORS.get(self.code, self.code)
        super().__init__(f"{message}: {detail}" if detail else message)

    def diagnostic(self) -> str:
        return f"{self.code}: {self}"


class DecodeError(MLGError):
    pass


class UnsupportedFormat(DecodeError):
    code = "E_UNSUPPORTED_FORMAT"


class UnsupportedVersion(DecodeError):
    code = "E_UNSUPPORTED_VERSION"


class CorruptLayout(DecodeError):
    code = "E_CORRUPT_LAYOUT"


class UnexpectedEndOfData(DecodeError):
    code = "E_UNEXPECTED_EOF"


class UnsupportedDisplayStyle(DecodeError):
    code = "E_UNSUPPORTED_DISPLAY_STYLE"


class UnsupportedFieldType(DecodeError):
    code = "E_UNSUPPORTED_FIELD_TYPE"


class UnsupportedBlockType(DecodeError):
    code = "E_UNSUPPORTED_BLOCK_TYPE"


class InvalidText(DecodeError):
    code = "E_INVALID_TEXT"


class InputReadError(MLGError):
    code = "E_INPUT_READ"


class OutputWriteError(MLGError):
    code = "E_OUTPUT_WRITE"
