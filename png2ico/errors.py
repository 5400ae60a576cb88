"""Exceptions raised while converting PNG images to ICO files."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for failures local to a single file conversion."""


class DecodeError(ConversionError):
    """Raised when input data is not a decodable PNG image."""


class DimensionError(ConversionError):
    """Raised when an image does not fit in a single ICO directory entry."""


class ExistsError(ConversionError):
    """Raised when the output file exists and overwriting is not allowed."""


class EncodeError(ConversionError):
    """Raised when an image cannot be re-encoded as PNG."""


class WriteError(ConversionError):
    """Raised when writing ICO data to the output stream fails."""


class PathError(ConversionError):
    """Raised when an input or output path cannot be accessed."""


class IcoFormatError(ValueError):
    """Raised when ICO data cannot be parsed."""


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read."""


class ConversionCancelled(Exception):
    """Raised between files once cancellation has been requested."""
