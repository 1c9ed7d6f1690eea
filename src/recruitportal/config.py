"""Application configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_DB_URL = "sqlite:///data/recruitportal.db"
DEFAULT_TOKEN_TTL_SECONDS = 24 * 60 * 60


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    app_name: str = "Recruitment Admin Portal"
    db_url: str = DEFAULT_DB_URL
    access_token_secret: str = "secret"
    access_token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_url=os.getenv("RECRUITPORTAL_DB_URL", "").strip() or DEFAULT_DB_URL,
            access_token_secret=os.getenv("RECRUITPORTAL_ACCESS_TOKEN_SECRET", "secret"),
            access_token_ttl_seconds=int(
                os.getenv("RECRUITPORTAL_ACCESS_TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS)
            ),
            cors_allow_origins=_split_csv(os.getenv("RECRUITPORTAL_CORS_ORIGINS", "*")) or ["*"],
        )


def get_settings() -> Settings:
    """Read settings fresh so tests and CLI runs see the current environment."""
    return Settings.from_env()
