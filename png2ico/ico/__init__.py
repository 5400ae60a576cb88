"""ICO container records, encoder and reader."""

from png2ico.ico.encoder import encode_ico, write_ico
from png2ico.ico.reader import IcoFile, read_ico, read_ico_file
from png2ico.ico.records import IcoDirectoryEntry, IcoFileHeader

__all__ = [
    "IcoDirectoryEntry",
    "IcoFile",
    "IcoFileHeader",
    "encode_ico",
    "read_ico",
    "read_ico_file",
    "write_ico",
]
