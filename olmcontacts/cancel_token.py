"""Global cancellation token for long-running extraction tasks."""

from __future__ import annotations

import threading

__all__ = [
    "cancel_all",
    "reset_all",
    "is_cancelled",
    "get_shared_event",
    "install_shared_event",
]


_evt: threading.Event = threading.Event()


def install_shared_event(event: threading.Event) -> None:
    """Install an event shared with the host (e.g. a UI "Stop" button)."""

    global _evt
    _evt = event


def get_shared_event() -> threading.Event:
    return _evt


def cancel_all() -> None:
    """Trigger the global cancellation token."""

    _evt.set()


def reset_all() -> None:
    """Reset the global cancellation token."""

    _evt.clear()


def is_cancelled() -> bool:
    """Return whether cancellation has been requested."""

    return _evt.is_set()
