"""Tests for SanitizeSettings — flags, env vars and config tables merged."""

from pathlib import Path

import pytest

from sanitize.config.settings import SanitizeSettings
from sanitize.domain.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SANITIZE_CONFIG", "SANITIZE_VERBOSE", "SANITIZE_ENGINE__METADATA_KEY"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = SanitizeSettings.resolve(start=tmp_path)
        assert settings.root == tmp_path
        assert settings.source is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.engine.metadata_key == "sanitize"
        assert settings.plugins.enabled is True
        assert settings.plugin_dir == tmp_path / ".sanitize" / "plugins"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = SanitizeSettings.resolve(start=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestConfigTable:
    def test_loads_sanitize_toml(self, tmp_path: Path) -> None:
        (tmp_path / "sanitize.toml").write_text('[engine]\nmetadata_key = "clean"\n')
        settings = SanitizeSettings.resolve(start=tmp_path)
        assert settings.engine.metadata_key == "clean"
        assert settings.plugins.enabled is True

    def test_loads_pyproject_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "shop"\n\n[tool.sanitize.plugins]\nlocal_dir = "rules"\n'
        )
        settings = SanitizeSettings.resolve(start=tmp_path)
        assert settings.source == (tmp_path / "pyproject.toml").resolve()
        assert settings.plugin_dir == tmp_path.resolve() / "rules"

    def test_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "sanitize.toml").write_text("[plugins]\nenabled = false\n")
        child = tmp_path / "src"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = SanitizeSettings.resolve()
        assert settings.root.resolve() == tmp_path.resolve()
        assert settings.plugins.enabled is False

    def test_explicit_config(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[plugins]\nlocal_dir = "extras"\n')
        settings = SanitizeSettings.resolve(config=str(custom), start=tmp_path)
        assert settings.source == custom
        assert settings.plugin_dir == custom.parent / "extras"


class TestConfigErrors:
    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "sanitize.toml").write_text("[engine\n")
        with pytest.raises(ConfigError, match="invalid TOML"):
            SanitizeSettings.resolve(start=tmp_path)

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="file not found"):
            SanitizeSettings.resolve(config=tmp_path / "nope.toml")

    def test_unknown_section(self, tmp_path: Path) -> None:
        (tmp_path / "sanitize.toml").write_text("verbose = true\n")
        with pytest.raises(ConfigError, match="unknown section"):
            SanitizeSettings.resolve(start=tmp_path)

    def test_misspelt_option(self, tmp_path: Path) -> None:
        (tmp_path / "sanitize.toml").write_text('[engine]\nmetdata_key = "clean"\n')
        with pytest.raises(ConfigError, match=r"engine\.metdata_key") as exc_info:
            SanitizeSettings.resolve(start=tmp_path)
        assert exc_info.value.path.endswith("sanitize.toml")


class TestPriority:
    def test_env_overrides_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "sanitize.toml").write_text('[engine]\nmetadata_key = "toml"\n')
        monkeypatch.setenv("SANITIZE_ENGINE__METADATA_KEY", "env")
        settings = SanitizeSettings.resolve(start=tmp_path)
        assert settings.engine.metadata_key == "env"

    def test_flag_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANITIZE_VERBOSE", "false")
        settings = SanitizeSettings.resolve(start=tmp_path, verbose=True)
        assert settings.verbose is True
