"""Command-line entry point: ``png2ico [OPTIONS] <input-path>``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from png2ico import __version__
from png2ico.cancel import CancellationToken, install_interrupt_handler
from png2ico.config import load_config
from png2ico.console import error, report_single, run_directory, warning
from png2ico.convert import convert_single, prepare_output_dir
from png2ico.errors import ConfigError, ConversionCancelled, ConversionError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

EXIT_OK = 0
EXIT_CANCELLED = 1


def configure_logging(verbose: bool, log_path: Optional[Path] = None) -> None:
    root = logging.getLogger("png2ico")
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_path is not None:
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="png2ico",
        description="Convert PNG images (up to 256x256) into Windows ICO files.",
    )
    parser.add_argument("input_path", nargs="?", type=Path, help="PNG file or directory to convert")
    parser.add_argument("-o", "--output", type=Path, help="Output directory for .ico files")
    parser.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--config", type=Path, help="INI file with default options")
    parser.add_argument("--log", type=Path, help="Also write a debug log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(args: argparse.Namespace, console: Console, cancel: CancellationToken) -> int:
    if args.input_path is None:
        console.print(build_parser().format_help(), markup=False, highlight=False)
        return EXIT_OK

    try:
        config = load_config(args.config).with_overrides(
            output_dir=args.output,
            force=args.force,
            verbose=args.verbose,
        )
    except ConfigError as exc:
        error(console, f"Error: {exc}")
        return EXIT_OK

    try:
        configure_logging(config.verbose, args.log)
    except OSError as exc:
        error(console, f"Error opening log file {args.log}: {exc}")
        return EXIT_OK
    logger.debug("Starting conversion: input=%s config=%s", args.input_path, config)

    try:
        prepare_output_dir(config)
        input_path: Path = args.input_path
        if not input_path.exists():
            error(console, f"Error: {input_path} does not exist")
            return EXIT_OK
        if input_path.is_dir():
            run_directory(console, input_path, config, cancel)
        else:
            report_single(console, convert_single(input_path, config, cancel))
    except ConversionCancelled:
        warning(console, "\nOperation cancelled by user")
        return EXIT_CANCELLED
    except ConversionError as exc:
        error(console, str(exc))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console(highlight=False, soft_wrap=True)
    cancel = CancellationToken()
    restore = install_interrupt_handler(cancel)
    try:
        return run(args, console, cancel)
    except KeyboardInterrupt:
        warning(console, "\nOperation cancelled by user")
        return EXIT_CANCELLED
    finally:
        restore()


if __name__ == "__main__":
    sys.exit(main())
