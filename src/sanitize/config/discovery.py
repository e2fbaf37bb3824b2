"""Locating the engine configuration.

Rules-engine settings live either in a dedicated ``sanitize.toml`` or in
the ``[tool.sanitize]`` table of a project's ``pyproject.toml``. Discovery
walks up from the working directory; the nearest directory holding either
wins, and within one directory ``sanitize.toml`` is preferred. A
``pyproject.toml`` without the table is passed over.

``SANITIZE_CONFIG`` (or ``--config``) names a file directly and disables
the walk.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sanitize.domain.errors import ConfigError

CONFIG_FILENAME = "sanitize.toml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TABLE = ("tool", "sanitize")
CONFIG_ENV_VAR = "SANITIZE_CONFIG"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigSource:
    """A config file plus the table inside it that holds our settings."""

    path: Path
    table: tuple[str, ...] = ()

    @property
    def root(self) -> Path:
        """Directory relative paths in the config resolve against."""
        return self.path.parent

    def read(self) -> dict[str, Any]:
        """Return the settings table; empty when the table is absent.

        Raises:
            ConfigError: If the file is not valid TOML or the table is not a table.
        """
        try:
            with self.path.open("rb") as fh:
                section: Any = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(self.path, f"invalid TOML: {exc}") from exc

        for key in self.table:
            section = section.get(key, {})
            if not isinstance(section, dict):
                raise ConfigError(self.path, f"[{'.'.join(self.table)}] must be a table")
        return section


def source_for(path: Path) -> ConfigSource:
    """Wrap an explicitly named file; a ``pyproject.toml`` is read at ``[tool.sanitize]``."""
    table = PYPROJECT_TABLE if path.name == PYPROJECT_FILENAME else ()
    return ConfigSource(path, table)


def find_config(start: Path | None = None) -> ConfigSource | None:
    """Find the config that applies to *start* (default: cwd), or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        named = Path(env_path)
        return source_for(named) if named.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        dedicated = directory / CONFIG_FILENAME
        if dedicated.is_file():
            return ConfigSource(dedicated)
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _declares_table(pyproject):
            return ConfigSource(pyproject, PYPROJECT_TABLE)
    return None


def _declares_table(pyproject: Path) -> bool:
    try:
        with pyproject.open("rb") as fh:
            document = tomllib.load(fh)
    except tomllib.TOMLDecodeError:
        logger.debug("Ignoring unreadable %s during config discovery", pyproject)
        return False
    tool = document.get("tool")
    return isinstance(tool, dict) and isinstance(tool.get("sanitize"), dict)
