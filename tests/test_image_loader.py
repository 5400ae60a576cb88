from __future__ import annotations

import io
import struct
import zlib

import pytest
from PIL import Image

from png2ico.errors import DecodeError, DimensionError
from png2ico.image_loader import load_png, load_png_bytes, validate_dimensions


def _png_bytes(size: tuple[int, int], mode: str = "RGBA", color=0) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_load_png_reports_dimensions() -> None:
    image = load_png(io.BytesIO(_png_bytes((16, 24))))

    assert image.width == 16
    assert image.height == 24
    assert image.size == (16, 24)


def test_pixel_returns_rgba_samples() -> None:
    source = Image.new("RGBA", (2, 2), (10, 20, 30, 40))
    source.putpixel((1, 0), (255, 0, 0, 255))
    buffer = io.BytesIO()
    source.save(buffer, format="PNG")

    image = load_png_bytes(buffer.getvalue())

    assert image.pixel(0, 0) == (10, 20, 30, 40)
    assert image.pixel(1, 0) == (255, 0, 0, 255)


def test_greyscale_input_is_normalized_to_rgba() -> None:
    image = load_png_bytes(_png_bytes((3, 3), mode="L", color=128))

    assert image.source_mode == "L"
    assert image.image.mode == "RGBA"
    assert image.pixel(2, 2) == (128, 128, 128, 255)


def test_pixel_outside_image_raises_index_error() -> None:
    image = load_png_bytes(_png_bytes((4, 4)))

    with pytest.raises(IndexError):
        image.pixel(4, 0)


def test_load_png_accepts_256_square() -> None:
    image = load_png_bytes(_png_bytes((256, 256)))

    assert image.size == (256, 256)


@pytest.mark.parametrize("size", [(257, 100), (100, 257), (300, 300)])
def test_load_png_rejects_oversized_images(size: tuple[int, int]) -> None:
    with pytest.raises(DimensionError, match="exceed maximum 256x256"):
        load_png_bytes(_png_bytes(size))


def test_validate_dimensions_rejects_empty_axis() -> None:
    with pytest.raises(DimensionError, match="at least 1x1"):
        validate_dimensions(0, 16)


def test_load_png_bytes_rejects_missing_signature() -> None:
    with pytest.raises(DecodeError, match="signature"):
        load_png_bytes(b"definitely not a png")


def test_load_png_rejects_corrupt_chunks() -> None:
    corrupt = b"\x89PNG\r\n\x1a\n" + b"\xff" * 64

    with pytest.raises(DecodeError, match="invalid PNG format"):
        load_png(io.BytesIO(corrupt))


def test_load_png_rejects_other_image_formats() -> None:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8)).save(buffer, format="BMP")
    buffer.seek(0)

    with pytest.raises(DecodeError):
        load_png(buffer)


def _chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data) & 0xFFFFFFFF)


def _header_only_png(width: int, height: int) -> bytes:
    """A 1-bit greyscale PNG whose IDAT does not hold enough rows for its IHDR."""

    ihdr = struct.pack(">IIBBBBB", width, height, 1, 0, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _chunk(b"IHDR", ihdr)
        + _chunk(b"IDAT", zlib.compress(b"\x00\x00"))
        + _chunk(b"IEND", b"")
    )


def test_load_png_rejects_huge_image_by_dimensions() -> None:
    with pytest.raises(DimensionError, match="exceed maximum 256x256"):
        load_png_bytes(_header_only_png(20000, 20000))


def test_load_png_checks_dimensions_before_decoding_pixels() -> None:
    # The pixel data is unusable, so only a header check can report the size.
    with pytest.raises(DimensionError, match=r"\(300x2\)"):
        load_png_bytes(_header_only_png(300, 2))
