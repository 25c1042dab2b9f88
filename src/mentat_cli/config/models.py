"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, mentat.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel


class ReplConfig(BaseModel):
    """[repl] section."""

    model_config = {"frozen": True}

    prompt: str = "mentat=> "
    continuation_prompt: str = "mentat.> "


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    default_path: str | None = None
    wal: bool = True


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
