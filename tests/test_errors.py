"""Tests for user-facing error messages."""

from __future__ import annotations

import zipfile

from olmcontacts.utils.errors import ArchiveError, EmptyArchiveError, ExtractionCancelled, UserError
from olmcontacts.utils.friendly_errors import to_user_message


def test_user_errors_pass_through():
    assert to_user_message(ArchiveError("Not a valid .olm (ZIP) archive: x.olm")) == (
        "Not a valid .olm (ZIP) archive: x.olm"
    )
    assert to_user_message(EmptyArchiveError()) == "No XML files found in .olm archive"
    assert to_user_message(UserError("")) == "The operation failed."


def test_known_exceptions_are_mapped():
    assert to_user_message(ExtractionCancelled()) == "Extraction cancelled."
    assert "ZIP" in to_user_message(zipfile.BadZipFile("bad"))
    assert to_user_message(PermissionError()) == "Permission denied while reading or writing files."


def test_unknown_exception_is_generic():
    assert to_user_message(RuntimeError("secret path /tmp/x")) == (
        "Unexpected error. Details were written to the log."
    )
