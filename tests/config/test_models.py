"""Tests for config section models."""

import pytest
from pydantic import ValidationError

from sanitize.config.models import EngineConfig, PluginsConfig


class TestSections:
    def test_defaults(self) -> None:
        assert EngineConfig().metadata_key == "sanitize"
        assert PluginsConfig().enabled is True
        assert PluginsConfig().local_dir == ".sanitize/plugins"

    def test_frozen(self) -> None:
        cfg = PluginsConfig()
        with pytest.raises(ValidationError):
            cfg.enabled = False  # type: ignore[misc]

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError, match="metdata_key"):
            EngineConfig.model_validate({"metdata_key": "clean"})

    def test_blank_metadata_key_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not be blank"):
            EngineConfig(metadata_key="  ")
