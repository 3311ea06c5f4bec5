"""Run an extraction off the caller's thread.

The host (CLI, GUI, web handler) hands over an archive path or a list of
members and gets progress snapshots through a callback while it waits. The
whole run happens in one background thread against one registry, so
observations stay ordered.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
import time
import traceback
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .archive import Member
from .pipeline import ProgressCB, extract_contacts, extract_from_path
from .utils.friendly_errors import to_user_message

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", Iterable[Member]]
Outcome = Tuple[bool, Dict[str, Any]]


def _normalize_progress_snapshot(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    """Add the ``done`` alias some hosts expect next to ``processed``."""

    snap = dict(snapshot)
    if "processed" in snap and "done" not in snap:
        snap["done"] = snap["processed"]
    return snap


def _thread_worker(
    source: Source,
    *,
    extract_from_preview: bool,
    progress_callback: ProgressCB,
) -> Outcome:
    def _emit_progress(snapshot: Dict[str, Any]) -> None:
        if progress_callback is None:
            return
        try:
            progress_callback(_normalize_progress_snapshot(snapshot))
        except Exception:
            logger.debug("progress callback failed", exc_info=True)

    _emit_progress({"stage": "worker_boot", "processed": 0, "total": None})
    try:
        if isinstance(source, (str, os.PathLike)):
            result = extract_from_path(
                source,
                extract_from_preview=extract_from_preview,
                progress_callback=_emit_progress,
            )
        else:
            result = extract_contacts(
                source,
                extract_from_preview=extract_from_preview,
                progress_callback=_emit_progress,
            )
    except Exception as exc:
        logger.warning("extraction worker failed: %s", exc)
        return False, {
            "error": to_user_message(exc),
            "exception": exc,
            "traceback": traceback.format_exc(),
        }
    return True, {"result": result}


def run_extraction_in_thread(
    source: Source,
    *,
    extract_from_preview: bool = False,
    timeout_sec: Optional[float] = None,
    progress_callback: ProgressCB = None,
) -> Outcome:
    """Run the extraction in a daemon thread and wait for its outcome.

    Returns ``(True, {"result": ExtractionResult})`` on success and
    ``(False, {"error": message, ...})`` otherwise. ``timeout_sec`` is a
    host-side limit: on expiry the caller stops waiting and the thread is
    left to finish in the background.
    """

    result_queue: "queue.SimpleQueue[Outcome]" = queue.SimpleQueue()

    def _target() -> None:
        outcome = _thread_worker(
            source,
            extract_from_preview=extract_from_preview,
            progress_callback=progress_callback,
        )
        result_queue.put(outcome)

    thread = threading.Thread(target=_target, name="olm-extract-worker", daemon=True)
    thread.start()

    deadline = None if timeout_sec is None else time.monotonic() + timeout_sec
    while True:
        wait = 0.2
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.error("extraction worker timed out after %ss", timeout_sec)
                return False, {"error": f"timeout after {timeout_sec}s"}
            wait = min(wait, remaining)
        try:
            return result_queue.get(timeout=wait)
        except queue.Empty:
            if not thread.is_alive() and result_queue.empty():
                logger.error("extraction worker finished without returning a result")
                return False, {"error": "no result from worker thread"}


__all__ = ["run_extraction_in_thread"]
