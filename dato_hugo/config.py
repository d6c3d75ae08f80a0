"""Configuration objects and constants for the exporter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_API_URL = "https://graphql.datocms.com/"
TOKEN_ENV_VAR = "DATOCMS_API_TOKEN"
ENVIRONMENT_ENV_VAR = "DATOCMS_ENVIRONMENT"

DEFAULT_HUGO_CONFIGS = ("config.dev.toml", "config.prod.toml")
DEFAULT_COLLECTIONS = ("services",)
DEFAULT_PAGE_SIZE = 100


@dataclass
class ExportConfig:
    """Top-level settings that control fetching and file generation."""

    root: Path
    api_token: str
    api_url: str = DEFAULT_API_URL
    environment: Optional[str] = None
    include_drafts: bool = False
    locale: Optional[str] = None
    collections: Tuple[str, ...] = DEFAULT_COLLECTIONS
    hugo_configs: Tuple[str, ...] = DEFAULT_HUGO_CONFIGS
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: float = 30.0

    @classmethod
    def from_env(cls, root: Path, **overrides) -> "ExportConfig":
        """Build a config using the DatoCMS environment variables."""
        token = overrides.pop("api_token", None) or os.getenv(TOKEN_ENV_VAR)
        if not token:
            raise ValueError(f"{TOKEN_ENV_VAR} is not set")
        if overrides.get("environment") is None:
            overrides["environment"] = os.getenv(ENVIRONMENT_ENV_VAR) or None
        return cls(root=Path(root), api_token=token, **overrides)
