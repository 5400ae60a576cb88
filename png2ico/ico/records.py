"""Fixed-size ICO header and directory records."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from png2ico.errors import IcoFormatError

ICO_HEADER_FORMAT = "<HHH"
ICO_ENTRY_FORMAT = "<BBBBHHLL"
ICO_HEADER_SIZE = struct.calcsize(ICO_HEADER_FORMAT)
ICO_ENTRY_SIZE = struct.calcsize(ICO_ENTRY_FORMAT)

ICO_TYPE_ICON = 1
ICO_TYPE_CURSOR = 2

MAX_ICON_DIMENSION = 256
RGBA_BITS_PER_PIXEL = 32


def encode_dimension(value: int) -> int:
    """Return the single-byte directory value for ``value`` pixels (256 -> 0)."""

    if not 1 <= value <= MAX_ICON_DIMENSION:
        raise ValueError(f"Icon dimension must be 1-{MAX_ICON_DIMENSION}, got {value}")
    return value % MAX_ICON_DIMENSION


def decode_dimension(value: int) -> int:
    return value or MAX_ICON_DIMENSION


def payload_offset(image_count: int) -> int:
    """Offset of the first payload when ``image_count`` entries follow the header."""

    return ICO_HEADER_SIZE + image_count * ICO_ENTRY_SIZE


@dataclass(frozen=True)
class IcoFileHeader:
    image_count: int = 1
    image_type: int = ICO_TYPE_ICON
    reserved: int = 0

    def pack(self) -> bytes:
        return struct.pack(ICO_HEADER_FORMAT, self.reserved, self.image_type, self.image_count)

    @classmethod
    def unpack_from(cls, data: bytes, offset: int = 0) -> "IcoFileHeader":
        if len(data) - offset < ICO_HEADER_SIZE:
            raise IcoFormatError("ICO data too small to contain a file header")
        reserved, image_type, image_count = struct.unpack_from(ICO_HEADER_FORMAT, data, offset)
        return cls(image_count=image_count, image_type=image_type, reserved=reserved)


@dataclass(frozen=True)
class IcoDirectoryEntry:
    """One 16-byte directory record describing an embedded image.

    ``width`` and ``height`` hold the encoded byte values, so an entry for a
    256 pixel wide image stores ``width == 0``. Use :attr:`pixel_width` and
    :attr:`pixel_height` for the real dimensions.
    """

    width: int
    height: int
    payload_size: int
    payload_offset: int
    color_count: int = 0
    reserved: int = 0
    color_planes: int = 1
    bits_per_pixel: int = RGBA_BITS_PER_PIXEL

    @classmethod
    def for_image(cls, width: int, height: int, payload_size: int, offset: int) -> "IcoDirectoryEntry":
        return cls(
            width=encode_dimension(width),
            height=encode_dimension(height),
            payload_size=payload_size,
            payload_offset=offset,
        )

    @property
    def pixel_width(self) -> int:
        return decode_dimension(self.width)

    @property
    def pixel_height(self) -> int:
        return decode_dimension(self.height)

    def pack(self) -> bytes:
        return struct.pack(
            ICO_ENTRY_FORMAT,
            self.width,
            self.height,
            self.color_count,
            self.reserved,
            self.color_planes,
            self.bits_per_pixel,
            self.payload_size,
            self.payload_offset,
        )

    @classmethod
    def unpack_from(cls, data: bytes, offset: int) -> "IcoDirectoryEntry":
        if len(data) - offset < ICO_ENTRY_SIZE:
            raise IcoFormatError(f"ICO directory entry at offset {offset} is truncated")
        (
            width,
            height,
            color_count,
            reserved,
            color_planes,
            bits_per_pixel,
            payload_size,
            entry_offset,
        ) = struct.unpack_from(ICO_ENTRY_FORMAT, data, offset)
        return cls(
            width=width,
            height=height,
            payload_size=payload_size,
            payload_offset=entry_offset,
            color_count=color_count,
            reserved=reserved,
            color_planes=color_planes,
            bits_per_pixel=bits_per_pixel,
        )
