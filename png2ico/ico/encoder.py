"""Serialize a decoded image as a single-entry PNG-in-ICO file."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, BinaryIO, Optional

from png2ico.errors import EncodeError, WriteError
from png2ico.ico.records import IcoDirectoryEntry, IcoFileHeader, payload_offset

if TYPE_CHECKING:
    from png2ico.image_loader import DecodedImage

logger = logging.getLogger(__name__)


def encode_png_payload(image: DecodedImage) -> bytes:
    """Re-encode ``image`` as a 32-bit RGBA PNG blob."""

    buffer = io.BytesIO()
    try:
        image.image.convert("RGBA").save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodeError(f"failed to encode PNG payload: {exc}") from exc
    return buffer.getvalue()


def build_ico_records(image: DecodedImage, payload: bytes) -> tuple[IcoFileHeader, IcoDirectoryEntry]:
    header = IcoFileHeader(image_count=1)
    entry = IcoDirectoryEntry.for_image(
        image.width,
        image.height,
        payload_size=len(payload),
        offset=payload_offset(header.image_count),
    )
    return header, entry


def encode_ico(image: DecodedImage) -> bytes:
    """Return the complete ICO file for ``image`` as bytes."""

    payload = encode_png_payload(image)
    header, entry = build_ico_records(image, payload)
    logger.debug(
        "Built ICO records: width=%s height=%s payload_size=%s offset=%s",
        entry.width,
        entry.height,
        entry.payload_size,
        entry.payload_offset,
    )
    return header.pack() + entry.pack() + payload


def write_ico(stream: BinaryIO, image: DecodedImage, payload: Optional[bytes] = None) -> int:
    """Write ``image`` to ``stream`` as an ICO file and return the byte count.

    ``payload`` is the PNG blob from :func:`encode_png_payload` when the caller
    already encoded it. Otherwise the payload is encoded completely before the
    first write, so an :class:`EncodeError` never leaves bytes in ``stream``.
    A failed write is not rolled back.
    """

    if payload is None:
        payload = encode_png_payload(image)
    header, entry = build_ico_records(image, payload)

    written = 0
    try:
        for chunk in (header.pack(), entry.pack(), payload):
            stream.write(chunk)
            written += len(chunk)
    except (OSError, ValueError) as exc:
        # ValueError covers writes to a closed stream.
        raise WriteError(f"failed to write ICO data after {written} bytes: {exc}") from exc

    logger.debug("Wrote ICO data: bytes=%s", written)
    return written
