from __future__ import annotations

from pathlib import Path

import pytest

from png2ico.config import ConvertConfig, load_config
from png2ico.errors import ConfigError


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "absent.ini") == ConvertConfig()
    assert load_config(None) == ConvertConfig()


def test_load_config_reads_section(tmp_path: Path) -> None:
    ini_path = tmp_path / "png2ico.ini"
    ini_path.write_text(
        """
[png2ico]
output = icons   ; relative to the working directory
force = yes
verbose = off
""".strip()
    )

    config = load_config(ini_path)

    assert config == ConvertConfig(output_dir=Path("icons"), force=True, verbose=False)


def test_config_without_section_uses_defaults(tmp_path: Path) -> None:
    ini_path = tmp_path / "other.ini"
    ini_path.write_text("[other]\nforce = yes\n")

    assert load_config(ini_path) == ConvertConfig()


def test_invalid_boolean_raises_config_error(tmp_path: Path) -> None:
    ini_path = tmp_path / "png2ico.ini"
    ini_path.write_text("[png2ico]\nforce = sometimes\n")

    with pytest.raises(ConfigError, match="Invalid boolean"):
        load_config(ini_path)


def test_malformed_ini_raises_config_error(tmp_path: Path) -> None:
    ini_path = tmp_path / "png2ico.ini"
    ini_path.write_text("force = yes\n")

    with pytest.raises(ConfigError, match="Could not read config file"):
        load_config(ini_path)


def test_command_line_flags_override_ini_values() -> None:
    base = ConvertConfig(output_dir=Path("from-ini"), force=True)

    merged = base.with_overrides(output_dir=Path("cli"), verbose=True)

    assert merged == ConvertConfig(output_dir=Path("cli"), force=True, verbose=True)
    assert base.with_overrides() == base
