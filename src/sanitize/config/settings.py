"""Resolved settings for one sanitize invocation.

Precedence, highest first:

1. explicit overrides passed to :meth:`SanitizeSettings.resolve` (CLI flags)
2. ``SANITIZE_*`` environment variables (``SANITIZE_ENGINE__METADATA_KEY``)
3. the ``[engine]``/``[plugins]`` tables of the discovered config
4. the defaults in :mod:`sanitize.config.models`

Every failure to turn those inputs into settings surfaces as a
:class:`~sanitize.domain.errors.ConfigError`.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from sanitize.config.discovery import ConfigSource, find_config, source_for
from sanitize.config.models import EngineConfig, PluginsConfig
from sanitize.domain.errors import ConfigError

FILE_SECTIONS = frozenset({"engine", "plugins"})

# Config file being applied by the current resolve() call.
_active_source: ContextVar[ConfigSource | None] = ContextVar(
    "sanitize_active_config", default=None
)


class ConfigTableSource(PydanticBaseSettingsSource):
    """Feeds the active config table's sections into the settings model."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        source = _active_source.get()
        self._sections: dict[str, Any] = {}
        if source is None:
            return
        table = source.read()
        unknown = sorted(set(table) - FILE_SECTIONS)
        if unknown:
            raise ConfigError(source.path, f"unknown section(s): {', '.join(unknown)}")
        self._sections = table

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._sections.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._sections)


class SanitizeSettings(BaseSettings):
    """Engine and CLI settings.

    Attributes:
        root: Directory of the config file, or the start directory when
            there is none. ``plugins.local_dir`` resolves against it.
        source: The config file applied, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="SANITIZE_",
        env_nested_delimiter="__",
    )

    root: Path = Field(default_factory=Path.cwd)
    source: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    engine: EngineConfig = Field(default_factory=EngineConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @property
    def plugin_dir(self) -> Path:
        return self.root / self.plugins.local_dir

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, ConfigTableSource(settings_cls))

    @classmethod
    def resolve(
        cls,
        *,
        config: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> SanitizeSettings:
        """Build settings for a run started in *start* (default: cwd).

        *config* names a file explicitly (``sanitize.toml`` format, or a
        ``pyproject.toml`` read at ``[tool.sanitize]``); otherwise the
        config is discovered by walking up from *start*.

        Raises:
            ConfigError: If the named file is missing, a config file is
                malformed, or a value fails validation.
        """
        if config is not None:
            named = Path(config)
            if not named.is_file():
                raise ConfigError(named, "file not found")
            source: ConfigSource | None = source_for(named)
        else:
            source = find_config(start)

        root = source.root if source else (start or Path.cwd())
        token = _active_source.set(source)
        try:
            return cls(root=root, source=source.path if source else None, **overrides)
        except ValidationError as exc:
            origin = source.path if source else "environment"
            raise ConfigError(origin, _summarize(exc)) from exc
        finally:
            _active_source.reset(token)


def _summarize(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors(include_url=False)
    )
