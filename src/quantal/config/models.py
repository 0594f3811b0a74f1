"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, quantal.toml only contains overrides.
A missing [catalog] definitions path means the packaged UCUM table.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from quantal.domain.conversions import DEFAULT_MAX_HOPS

# --- quantal.toml sections ---


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    definitions: Path | None = None
    max_hops: int = Field(default=DEFAULT_MAX_HOPS, ge=1)


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = Field(default=100, ge=40)
