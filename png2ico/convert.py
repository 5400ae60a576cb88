"""Convert PNG files, singly or across a directory tree, into ICO files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from png2ico.cancel import CancellationToken, check_cancelled
from png2ico.config import ConvertConfig
from png2ico.errors import ConversionCancelled, ConversionError, ExistsError, PathError, WriteError
from png2ico.ico.encoder import encode_png_payload, write_ico
from png2ico.image_loader import load_png

logger = logging.getLogger(__name__)

PNG_SUFFIX = ".png"
ICO_SUFFIX = ".ico"


@dataclass
class FileResult:
    """Outcome of converting one input file."""

    input_path: Path
    output_path: Optional[Path] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Per-file outcomes of a directory conversion."""

    root: Path
    results: List[FileResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def failures(self) -> List[FileResult]:
        return [result for result in self.results if not result.ok]


def is_png_path(path: Path | str) -> bool:
    return Path(path).suffix.lower() == PNG_SUFFIX


def output_path_for(input_path: Path | str, config: ConvertConfig) -> Path:
    """Return ``input_path`` with an ``.ico`` extension, moved to the output directory if set."""

    source = Path(input_path)
    target_dir = config.output_dir if config.output_dir is not None else source.parent
    return target_dir / (source.stem + ICO_SUFFIX)


def prepare_output_dir(config: ConvertConfig) -> None:
    if config.output_dir is None:
        return
    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PathError(f"Error creating output directory {config.output_dir}: {exc}") from exc


def convert_file(
    input_path: Path | str,
    config: ConvertConfig,
    cancel: Optional[CancellationToken] = None,
) -> Path:
    """Convert one PNG file and return the path of the written ICO file.

    The PNG payload is encoded before the output file is created, so decode,
    dimension and encode failures never leave a file behind.
    """

    check_cancelled(cancel)
    source = Path(input_path)
    logger.debug("Converting file: input=%s", source)

    try:
        with source.open("rb") as input_file:
            image = load_png(input_file)
    except OSError as exc:
        raise PathError(f"failed to open input file {source}: {exc}") from exc

    output_path = output_path_for(source, config)
    try:
        output_exists = output_path.exists()
    except OSError as exc:
        raise PathError(f"failed to check output file {output_path}: {exc}") from exc
    if not config.force and output_exists:
        raise ExistsError(f"output file exists: {output_path} (use -f to overwrite)")

    payload = encode_png_payload(image)

    try:
        output_file = output_path.open("wb")
    except OSError as exc:
        raise PathError(f"failed to create output file {output_path}: {exc}") from exc

    try:
        with output_file:
            written = write_ico(output_file, image, payload=payload)
    except OSError as exc:
        raise WriteError(f"failed to write ICO file {output_path}: {exc}") from exc

    logger.info("Converted: input=%s output=%s bytes=%s", source, output_path, written)
    return output_path


def _convert_to_result(
    input_path: Path,
    config: ConvertConfig,
    cancel: Optional[CancellationToken],
) -> FileResult:
    try:
        output_path = convert_file(input_path, config, cancel)
    except ConversionCancelled:
        raise
    except ConversionError as exc:
        logger.info("Conversion failed: input=%s error=%s", input_path, exc)
        return FileResult(input_path=input_path, error=exc)
    except Exception as exc:
        logger.exception("Unexpected error converting file: input=%s", input_path)
        return FileResult(input_path=input_path, error=exc)
    return FileResult(input_path=input_path, output_path=output_path)


def convert_single(
    input_path: Path | str,
    config: ConvertConfig,
    cancel: Optional[CancellationToken] = None,
) -> FileResult:
    """Convert a single file named on the command line."""

    source = Path(input_path)
    if not is_png_path(source):
        return FileResult(input_path=source, error=PathError("Input file must be a PNG image"))
    return _convert_to_result(source, config, cancel)


def find_png_files(root: Path | str) -> List[Path]:
    """Return every ``.png`` file under ``root`` (any case), in sorted walk order."""

    def _raise(exc: OSError) -> None:
        raise PathError(f"Error walking directory: {exc}") from exc

    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            if is_png_path(name):
                found.append(Path(dirpath) / name)
    return found


def convert_directory(
    root: Path | str,
    config: ConvertConfig,
    cancel: Optional[CancellationToken] = None,
    on_result: Optional[Callable[[FileResult], None]] = None,
    files: Optional[List[Path]] = None,
) -> BatchResult:
    """Convert every PNG under ``root``, one file at a time.

    Failures are recorded in the returned :class:`BatchResult` and do not stop
    the remaining files. ``on_result`` is called after each file. Cancellation
    is checked before each file and raises :class:`ConversionCancelled`.
    """

    batch = BatchResult(root=Path(root))
    png_files = files if files is not None else find_png_files(root)
    logger.info("Converting directory: root=%s files=%s", root, len(png_files))

    for png_path in png_files:
        check_cancelled(cancel)
        result = _convert_to_result(png_path, config, cancel)
        batch.results.append(result)
        if on_result is not None:
            on_result(result)

    logger.info(
        "Directory conversion finished: root=%s succeeded=%s total=%s",
        root,
        batch.succeeded,
        batch.total,
    )
    return batch
