"""Configuration sections with code-baked defaults.

Config files only carry overrides; an empty file or table yields these
defaults. Unknown keys are rejected so a misspelt option fails loudly
instead of silently changing which fields get sanitized.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class EngineConfig(BaseModel):
    """[engine] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    metadata_key: str = "sanitize"

    @field_validator("metadata_key")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "metadata_key must not be blank"
            raise ValueError(msg)
        return value


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    enabled: bool = True
    local_dir: str = ".sanitize/plugins"
