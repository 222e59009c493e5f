"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, depcheck.toml only contains overrides.
A repository without a config file gets a DOT graph of ``./...`` with no
root validation and no exclusions.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

GraphFormat = Literal["dot", "json"]


# --- depcheck.toml sections ---


class GraphConfig(BaseModel):
    """[graph] section."""

    model_config = {"frozen": True}

    roots: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)


class CollectConfig(BaseModel):
    """[collect] section."""

    model_config = {"frozen": True}

    go_binary: str = "go"
    patterns: list[str] = Field(default_factory=lambda: ["./..."])
    tags: list[str] = Field(default_factory=list)
    timeout: float = 120.0


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    format: GraphFormat = "dot"
    rankdir: str = "LR"
