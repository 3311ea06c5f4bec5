"""Environment-driven settings.

Values are read once at import time. Call :func:`olmcontacts.load_env` before
importing this module to pick up a ``.env`` file.
"""

from __future__ import annotations

import os
from pathlib import Path

__all__ = [
    "get_bool",
    "EXTRACT_FROM_PREVIEW",
    "FREQUENT_MIN_COUNT",
    "TOP_N",
    "PROGRESS_EVERY",
    "MAX_MEMBER_MB",
    "OUTPUT_DIR",
]


def get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _int(name: str, default: int, *, minimum: int | None = None) -> int:
    """Read integer environment variables with graceful fallback."""

    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if minimum is not None and parsed < minimum:
        return default
    return parsed


def _str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    return raw if raw else default


# Извлекать ли адреса из текста превью (эвристика, по умолчанию выключено)
EXTRACT_FROM_PREVIEW = get_bool("OLM_EXTRACT_FROM_PREVIEW", False)

FREQUENT_MIN_COUNT = _int("OLM_FREQUENT_MIN_COUNT", 3, minimum=1)
TOP_N = _int("OLM_TOP_N", 10, minimum=0)

# Progress is reported every N records plus once at 100%
PROGRESS_EVERY = _int("OLM_PROGRESS_EVERY", 100, minimum=1)

# Members above this size are skipped, not read into memory
MAX_MEMBER_MB = _int("OLM_MAX_MEMBER_MB", 64, minimum=1)

OUTPUT_DIR = Path(_str("OLM_OUTPUT_DIR", "output"))
