"""
qform configuration — all environment variables in one place.

Read from environment at runtime. Never hardcode credentials; the bearer
token lives in the CLI credential file, not here.
"""

from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None


class Settings:
    """Application settings from environment variables."""

    # Remote questionnaire store
    API_URL: str = os.environ.get("QFORM_API_URL", "http://localhost:8000")
    CREATE_PATH: str = os.environ.get("QFORM_CREATE_PATH", "/questionary/create")
    STATS_PATH: str = os.environ.get("QFORM_STATS_PATH", "/statistics")
    SUBMIT_TIMEOUT: float = _float_env("QFORM_SUBMIT_TIMEOUT", 30.0)

    # Editing history depth; 0 keeps every snapshot for the session
    HISTORY_LIMIT: int = _int_env("QFORM_HISTORY_LIMIT", 0)


# Singleton instance
settings = Settings()

if settings.HISTORY_LIMIT < 0:
    raise RuntimeError("QFORM_HISTORY_LIMIT must be >= 0")
