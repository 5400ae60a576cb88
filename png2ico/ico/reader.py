"""Parse ICO headers and directories back out of ICO data."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from png2ico.errors import IcoFormatError
from png2ico.ico.records import (
    ICO_ENTRY_SIZE,
    ICO_HEADER_SIZE,
    ICO_TYPE_CURSOR,
    ICO_TYPE_ICON,
    IcoDirectoryEntry,
    IcoFileHeader,
)


@dataclass(frozen=True)
class IcoFile:
    header: IcoFileHeader
    entries: List[IcoDirectoryEntry]
    data: bytes

    def payload(self, index: int = 0) -> bytes:
        """Return the image data of entry ``index`` using its declared offset and size."""

        entry = self.entries[index]
        return self.data[entry.payload_offset : entry.payload_offset + entry.payload_size]


def read_ico(data: bytes) -> IcoFile:
    header = IcoFileHeader.unpack_from(data)
    if header.reserved != 0:
        raise IcoFormatError(f"ICO header reserved field must be 0, got {header.reserved}")
    if header.image_type not in (ICO_TYPE_ICON, ICO_TYPE_CURSOR):
        raise IcoFormatError(f"Unknown ICO image type {header.image_type}")

    entries: List[IcoDirectoryEntry] = []
    for index in range(header.image_count):
        entry = IcoDirectoryEntry.unpack_from(data, ICO_HEADER_SIZE + index * ICO_ENTRY_SIZE)
        end = entry.payload_offset + entry.payload_size
        if end > len(data):
            raise IcoFormatError(
                f"ICO entry {index} payload is truncated: expected {end} bytes, found {len(data)}"
            )
        entries.append(entry)

    return IcoFile(header=header, entries=entries, data=data)


def read_ico_file(path: Path | str) -> IcoFile:
    return read_ico(Path(path).read_bytes())
