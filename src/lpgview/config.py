"""
Global Configuration and Visual Defaults.

This module centralizes the constants that shape a compiled graph (default
colors and sizes), the enrichment parameters (community palette, layout
physics) and the search tuning. Runtime settings that vary per deployment
(which storage backend, credentials, seeds) are read from ``LPGVIEW_*``
environment variables into a frozen ``Settings`` model.
"""

from __future__ import annotations

import os
from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Document ---
# Top-level key holding the array of relationship tables
RELATIONSHIPS_KEY = "relationships"

# --- Node Defaults ---
DEFINED_NODE_COLOR = "#4A90E2"  # Default blue for explicitly declared nodes
DEFINED_NODE_SIZE = 20

PLACEHOLDER_NODE_COLOR = "#CCCCCC"  # Grey for nodes only referenced by a relationship
PLACEHOLDER_NODE_SIZE = 12

# Initial coordinates are drawn uniformly from [COORD_MIN, COORD_MAX)
COORD_MIN = 0.0
COORD_MAX = 1.0

# --- Edge Defaults ---
DEFAULT_EDGE_LABEL = "related"
EDGE_SIZE = 4
EDGE_COLOR = "#ccc"

# --- Enrichment ---
COMMUNITY_PALETTE: Tuple[str, ...] = (
    "#FA4F40",  # Red
    "#405CFA",  # Blue
    "#5CFA40",  # Green
    "#FACC40",  # Yellow
    "#A040FA",  # Purple
)

LAYOUT_ITERATIONS = 100
LAYOUT_GRAVITY = 1.0
LAYOUT_SCALING_RATIO = 1.0

# --- Interaction ---
DIMMED_NODE_COLOR = "#e2e2e2"
HOVER_EDGE_SIZE = 6
EMPHASIS_SECONDS = 1.5
EMPHASIS_SIZE_FACTOR = 2
CAMERA_DURATION_MS = 600

# --- Search ---
SEARCH_THRESHOLD = 0.4
SEARCH_LIMIT = 8
SEARCH_KEYS: Tuple[Tuple[str, float], ...] = (
    ("label", 2.0),
    ("description", 1.0),
    ("link", 1.0),
    ("tags", 1.0),
)
SNIPPET_WIDTH = 60

# --- Storage ---
DOCUMENT_SUFFIXES: Tuple[str, ...] = (".toml",)
GDRIVE_API_BASE = "https://www.googleapis.com/drive/v3"
GDRIVE_PAGE_SIZE = 10


class ProviderKind(StrEnum):
    """Storage backends selectable at configuration time."""
    LOCAL = "local"
    GDRIVE = "gdrive"
    MEMORY = "memory"


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderKind = Field(
        default=ProviderKind.LOCAL,
        description="Storage backend used by the document loader",
    )
    root_dir: Path = Field(
        default=Path("."),
        description="Directory browsed by the local provider",
    )
    gdrive_token: Optional[str] = Field(
        default=None,
        description="OAuth access token for the Google Drive provider",
    )
    layout_seed: Optional[int] = Field(
        default=None,
        description="Seed for initial coordinates and layout (unseeded when unset)",
    )
    emphasis_seconds: float = Field(default=EMPHASIS_SECONDS, gt=0)
    search_limit: int = Field(default=SEARCH_LIMIT, ge=1)
    suffixes: List[str] = Field(default_factory=lambda: list(DOCUMENT_SUFFIXES))

    @field_validator("root_dir", mode="before")
    @classmethod
    def _normalize_root(cls, value: str | Path | None) -> Path:
        if value is None or value == "":
            return Path(".").resolve()
        return Path(value).expanduser().resolve()

    @field_validator("gdrive_token", mode="before")
    @classmethod
    def _strip_token(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache runtime settings."""
    seed = _read_env("LPGVIEW_LAYOUT_SEED")
    suffixes = _read_env("LPGVIEW_SUFFIXES")

    values = {
        "provider": _read_env("LPGVIEW_PROVIDER", ProviderKind.LOCAL.value),
        "root_dir": _read_env("LPGVIEW_ROOT_DIR", "."),
        "gdrive_token": _read_env("LPGVIEW_GDRIVE_TOKEN"),
        "layout_seed": int(seed) if seed else None,
        "emphasis_seconds": float(_read_env("LPGVIEW_EMPHASIS_SECONDS", str(EMPHASIS_SECONDS))),
        "search_limit": int(_read_env("LPGVIEW_SEARCH_LIMIT", str(SEARCH_LIMIT))),
    }
    if suffixes:
        values["suffixes"] = [s.strip() for s in suffixes.split(",") if s.strip()]
    return Settings(**values)


def reload_settings() -> Settings:
    """Clear cached settings (useful for tests) and reload."""
    get_settings.cache_clear()
    return get_settings()
