"""
config.py
---------
.env / environment → Settings. Nothing here talks to the network.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


@dataclass
class Settings:
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    temperature: float = 0.75
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))


def _origins(raw: str | None) -> list[str]:
    if not raw:
        return list(DEFAULT_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


def load_settings(env: dict[str, str] | None = None) -> Settings:
    """Read settings from `env`, or from os.environ after loading .env."""
    if env is None:
        load_dotenv()
        env = dict(os.environ)
    return Settings(
        api_key      = env.get("GROQ_API_KEY") or None,
        model        = env.get("LYRICOS_MODEL") or DEFAULT_MODEL,
        temperature  = float(env.get("LYRICOS_TEMPERATURE") or 0.75),
        cors_origins = _origins(env.get("LYRICOS_CORS_ORIGINS")),
    )
