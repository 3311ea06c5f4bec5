"""Shared helpers: environment loading and logging."""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def load_env(script_dir: Path | None = None) -> None:
    """Load environment variables from ``.env`` files.

    The file next to ``script_dir`` is read first, then the one in the current
    working directory. Variables already present in the environment win.
    """
    try:
        if script_dir is not None:
            load_dotenv(dotenv_path=Path(script_dir) / ".env")
        load_dotenv()
    except Exception as exc:
        logger.debug("load_env failed: %r", exc)


__all__ = ["load_env", "setup_logging"]
