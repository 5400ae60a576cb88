"""Decode PNG input into an in-memory RGBA raster."""

from __future__ import annotations

import io
import logging
import struct
import zlib
from dataclasses import dataclass, field
from typing import BinaryIO, Tuple

from PIL import Image

from png2ico.errors import DecodeError, DimensionError
from png2ico.ico.records import MAX_ICON_DIMENSION

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Pillow reports broken chunks as SyntaxError and truncated data as OSError.
_PILLOW_DECODE_ERRORS = (
    OSError,
    SyntaxError,
    ValueError,
    EOFError,
    struct.error,
    zlib.error,
)


@dataclass(frozen=True)
class DecodedImage:
    """A decoded image normalized to RGBA.

    ``image`` is owned by the conversion that produced it and must not be
    modified.
    """

    image: Image.Image = field(repr=False)
    source_mode: str = "RGBA"

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Return the ``(r, g, b, a)`` sample at column ``x``, row ``y``."""

        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return tuple(self.image.getpixel((x, y)))


def validate_dimensions(width: int, height: int) -> None:
    if width > MAX_ICON_DIMENSION or height > MAX_ICON_DIMENSION:
        raise DimensionError(
            f"image dimensions ({width}x{height}) exceed maximum "
            f"{MAX_ICON_DIMENSION}x{MAX_ICON_DIMENSION}"
        )
    if width < 1 or height < 1:
        raise DimensionError(f"image dimensions ({width}x{height}) must be at least 1x1")


def load_png(stream: BinaryIO) -> DecodedImage:
    """Decode PNG data read from ``stream``.

    Raises
    ------
    DecodeError
        The data is not a PNG image Pillow can decode.
    DimensionError
        Either axis is larger than 256 pixels or empty.
    """

    try:
        with Image.open(stream, formats=["PNG"]) as source:
            # IHDR is parsed by open(); reject before decoding the pixel data.
            validate_dimensions(source.width, source.height)
            source.load()
            source_mode = source.mode
            rgba = source.convert("RGBA")
    except Image.DecompressionBombError as exc:
        raise DimensionError(
            f"image dimensions exceed maximum {MAX_ICON_DIMENSION}x{MAX_ICON_DIMENSION}: {exc}"
        ) from exc
    except _PILLOW_DECODE_ERRORS as exc:
        raise DecodeError(f"invalid PNG format: {exc}") from exc

    logger.debug("Decoded PNG: size=%sx%s mode=%s", rgba.width, rgba.height, source_mode)
    return DecodedImage(image=rgba, source_mode=source_mode)


def load_png_bytes(data: bytes) -> DecodedImage:
    """Decode PNG data held in memory."""

    if not data.startswith(PNG_SIGNATURE):
        raise DecodeError("invalid PNG format: missing PNG signature")
    return load_png(io.BytesIO(data))
