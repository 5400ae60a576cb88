"""Conversion settings built once at startup."""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from png2ico.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_SECTION = "png2ico"


@dataclass(frozen=True)
class ConvertConfig:
    """Options shared by every conversion in a run."""

    output_dir: Optional[Path] = None
    force: bool = False
    verbose: bool = False

    def with_overrides(
        self,
        *,
        output_dir: Optional[Path] = None,
        force: bool = False,
        verbose: bool = False,
    ) -> "ConvertConfig":
        """Return a copy with command-line values applied.

        Flags can only switch an option on, so a ``False`` flag keeps the
        value loaded from the INI file.
        """

        return replace(
            self,
            output_dir=output_dir if output_dir is not None else self.output_dir,
            force=self.force or force,
            verbose=self.verbose or verbose,
        )


def load_config(ini_path: Path | str | None) -> ConvertConfig:
    """Read defaults from the ``[png2ico]`` section of ``ini_path``.

    A missing file yields the built-in defaults.
    """

    if ini_path is None:
        return ConvertConfig()

    path = Path(ini_path)
    if not path.is_file():
        logger.info("Config file not found, using defaults: path=%s", path)
        return ConvertConfig()

    parser = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
    try:
        with path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, configparser.Error, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    if not parser.has_section(CONFIG_SECTION):
        return ConvertConfig()

    section = parser[CONFIG_SECTION]
    try:
        force = section.getboolean("force", fallback=False)
        verbose = section.getboolean("verbose", fallback=False)
    except ValueError as exc:
        raise ConfigError(f"Invalid boolean in {path}: {exc}") from exc

    output = section.get("output", fallback="").strip()
    config = ConvertConfig(
        output_dir=Path(output).expanduser() if output else None,
        force=force,
        verbose=verbose,
    )
    logger.debug("Loaded config: path=%s config=%s", path, config)
    return config
