"""
Service settings, read from the environment.

A `.env` file in the working directory (or the repository root) is loaded
with python-dotenv first, so local overrides do not need a manual `export`.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

_ROOT_ENV = os.path.abspath(os.path.join(os.path.dirname(__file__), "../..", ".env"))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    reload: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        load_dotenv(_ROOT_ENV)
        return cls(
            host=os.getenv("BLUEPRINTS_HOST", "0.0.0.0"),
            port=int(os.getenv("BLUEPRINTS_PORT", "3001")),
            log_level=os.getenv("BLUEPRINTS_LOG_LEVEL", "INFO").upper(),
            reload=_env_bool("BLUEPRINTS_RELOAD", False),
            cors_origins=_env_list("BLUEPRINTS_CORS_ORIGINS", "*"),
        )


settings = Settings.from_env()
