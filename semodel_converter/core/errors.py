# File: core/errors.py
# Purpose: Exception types raised by the converter
# Notes:
# - Writers do not catch input contract violations; IndexError / AttributeError
#   propagate as-is and abort the single conversion
# - I/O errors (OSError) propagate unchanged


class ConversionError(Exception):
    """Base class for converter errors"""


class UnsupportedFormatError(ConversionError, KeyError):
    """No writer is registered for the requested extension"""

    def __init__(self, extension: str):
        super().__init__(extension)
        self.extension = extension

    def __str__(self) -> str:
        return f"Unsupported output format: {self.extension!r}"


class ModelParseError(ConversionError):
    """Source model file could not be decoded"""


class ContainerError(ConversionError):
    """Compressed container is malformed or its length does not match"""


class ChunkError(ConversionError):
    """Chunk stream contains an unknown tag or a truncated payload"""
