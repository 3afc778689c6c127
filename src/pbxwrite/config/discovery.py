"""Locating and reading ``pbxwrite.toml``.

The file is looked up like git looks up ``.git/``: the start directory
first, then each parent. ``PBXWRITE_CONFIG`` names a file directly and
turns the walk off.

Recognised top-level keys are the ``[encode]`` and ``[project]`` tables
plus the ``verbose`` and ``log_json`` flags. Anything else is reported
and ignored.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pbxwrite.config.models import PbxConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pbxwrite.toml"
CONFIG_ENV_VAR = "PBXWRITE_CONFIG"

SECTIONS = ("encode", "project")
FLAGS = ("verbose", "log_json")


class ConfigError(ValueError):
    """Raised when pbxwrite.toml cannot be parsed."""


def search_path(start: Path | None = None) -> Iterator[Path]:
    """Candidate config paths from *start* (default: cwd) up to the filesystem root."""
    directory = (start or Path.cwd()).resolve()
    yield directory / CONFIG_FILENAME
    for parent in directory.parents:
        yield parent / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """The config file in effect for *start*, or None.

    When ``PBXWRITE_CONFIG`` is set only that file is considered.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.is_file():
            return path
        logger.warning("%s points at %s, which is not a file", CONFIG_ENV_VAR, path)
        return None

    return next((p for p in search_path(start) if p.is_file()), None)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, warning about keys pbxwrite does not use.

    Raises:
        ConfigError: The file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc

    for key in data:
        if key not in SECTIONS and key not in FLAGS:
            logger.warning("Ignoring unknown key %r in %s", key, path)
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> PbxConfig:
    """The ``[encode]`` and ``[project]`` sections of a config file.

    Discovers the file from *cwd* when *path* is None. Missing file or
    missing sections fall back to the defaults.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return PbxConfig()

    data = read_toml(path)
    return PbxConfig.model_validate({name: data[name] for name in SECTIONS if name in data})
