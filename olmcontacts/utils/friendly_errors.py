"""Map low-level exceptions to user-friendly messages."""

from __future__ import annotations

import zipfile

from .errors import ExtractionCancelled, UserError


_MAP: dict[type[BaseException], str] = {
    ExtractionCancelled: "Extraction cancelled.",
    zipfile.BadZipFile: "The file is damaged or is not an .olm (ZIP) archive.",
    FileNotFoundError: "File not found. Check the path and try again.",
    IsADirectoryError: "Expected a file but got a directory.",
    PermissionError: "Permission denied while reading or writing files.",
    MemoryError: "Not enough memory to process the archive.",
}


def to_user_message(exc: BaseException) -> str:
    """Return a short message that is safe to show to end users."""

    if isinstance(exc, UserError):
        text = str(exc).strip()
        return text or "The operation failed."
    for etype, msg in _MAP.items():
        if isinstance(exc, etype):
            return msg
    return "Unexpected error. Details were written to the log."


__all__ = ["to_user_message"]
