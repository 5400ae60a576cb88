"""Colored console reporting and the directory progress bar."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from png2ico.cancel import CancellationToken
from png2ico.config import ConvertConfig
from png2ico.convert import BatchResult, FileResult, convert_directory, find_png_files


def error(console: Console, message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")


def warning(console: Console, message: str) -> None:
    console.print(f"[yellow]{escape(message)}[/yellow]")


def success(console: Console, message: str) -> None:
    console.print(f"[green]{escape(message)}[/green]")


def report_single(console: Console, result: FileResult) -> None:
    if result.ok:
        success(console, f"Successfully converted: {result.input_path}")
    else:
        error(console, f"Conversion failed: {result.error}")


def report_file(console: Console, result: FileResult) -> None:
    """Per-file line printed in verbose directory mode."""

    if result.ok:
        success(console, f"Converted: {result.input_path}")
    else:
        error(console, f"Error converting {result.input_path}: {result.error}")


def run_directory(
    console: Console,
    root: Path,
    config: ConvertConfig,
    cancel: Optional[CancellationToken] = None,
) -> Optional[BatchResult]:
    """Convert ``root`` with a progress bar; return ``None`` when it holds no PNG files."""

    png_files = find_png_files(root)
    if not png_files:
        warning(console, f"No PNG files found in directory: {root}")
        return None

    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )
    with progress:
        task = progress.add_task("Converting", total=len(png_files))

        def _on_result(result: FileResult) -> None:
            if config.verbose:
                report_file(progress.console, result)
            progress.advance(task)

        batch = convert_directory(root, config, cancel, on_result=_on_result, files=png_files)

    success(console, f"Successfully converted {batch.succeeded}/{batch.total} files")
    return batch
