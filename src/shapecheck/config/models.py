"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, shapecheck.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    deep: bool = False


class DocumentConfig(BaseModel):
    """[documents] section."""

    model_config = {"frozen": True}

    encoding: str = "utf-8"
    yaml_suffixes: tuple[str, ...] = (".yaml", ".yml")
