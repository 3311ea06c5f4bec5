"""Central logging configuration helpers."""

from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_CONFIGURED = False


def _ensure_parent(path: Path) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return False
    return True


def setup_logging(level: int = logging.INFO, *, to_file: Optional[bool] = None) -> None:
    """Configure the root logger once with console and file handlers.

    File handlers rotate at midnight and live under ``OLM_LOG_DIR`` (``logs``
    by default). ``OLM_LOG_TO_FILE=0`` keeps logging on the console only.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(_DEFAULT_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    console.setLevel(level)
    root.addHandler(console)

    if to_file is None:
        to_file = os.getenv("OLM_LOG_TO_FILE", "1").strip() == "1"

    if to_file:
        base_dir = Path(os.getenv("OLM_LOG_DIR", "logs")).resolve()
        info_log = base_dir / "olmcontacts_info.log"
        err_log = base_dir / "olmcontacts_errors.log"
        if _ensure_parent(info_log):
            info_handler = TimedRotatingFileHandler(
                info_log.as_posix(), when="midnight", backupCount=7, encoding="utf-8"
            )
            info_handler.setLevel(logging.INFO)
            info_handler.setFormatter(fmt)
            root.addHandler(info_handler)

            err_handler = TimedRotatingFileHandler(
                err_log.as_posix(), when="midnight", backupCount=14, encoding="utf-8"
            )
            err_handler.setLevel(logging.ERROR)
            err_handler.setFormatter(fmt)
            root.addHandler(err_handler)

    _CONFIGURED = True


__all__ = ["setup_logging"]
