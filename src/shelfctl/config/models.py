"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, shelfctl.toml only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    backend: Literal["sqlite", "memory"] = "sqlite"
    # Relative paths resolve against the root directory.
    path: Path = Path(".shelfctl") / "shelfctl.db"


class LendingConfig(BaseModel):
    """[lending] section."""

    model_config = {"frozen": True}

    # Active rentals due within this many days are flagged as due soon.
    due_soon_days: int = Field(default=2, ge=0)

