# app/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

DEFAULT_PORT = 3100
DEFAULT_RATE_LIMIT_PER_MINUTE = 120
DEFAULT_MAX_BODY_BYTES = 2 * 1024 * 1024


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    site_root: str
    plan_path: str
    openai_api_key: str
    llm_model: str
    llm_temperature: float
    rate_limit_per_minute: int
    rate_limit_disabled: bool
    max_body_bytes: int

    @property
    def has_openai_key(self) -> bool:
        return bool(self.openai_api_key)


@lru_cache()
def get_settings() -> Settings:
    site_root = os.path.abspath(os.getenv("SITE_ROOT") or os.getcwd())
    plan_path: Optional[str] = os.getenv("PLAN_PATH")
    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", DEFAULT_PORT),
        site_root=site_root,
        plan_path=plan_path or os.path.join(site_root, "data", "plan.json"),
        openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        llm_model=os.getenv("LLM_MODEL_FINANCE", "gpt-4o-mini"),
        llm_temperature=_env_float("LLM_TEMPERATURE_FINANCE", 0.3),
        rate_limit_per_minute=_env_int("RATE_LIMIT_PER_MINUTE", DEFAULT_RATE_LIMIT_PER_MINUTE),
        rate_limit_disabled=_env_bool("RATE_LIMIT_DISABLED"),
        max_body_bytes=_env_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
    )
