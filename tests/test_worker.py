"""Tests for the background extraction runner."""

from __future__ import annotations

import time

from olmcontacts.models import ExtractionResult
from olmcontacts.worker import run_extraction_in_thread


def test_path_source_succeeds(make_olm, record):
    path = make_olm({"m.xml": record(to=[("to@example.com", "To Name")])})
    seen = []
    ok, payload = run_extraction_in_thread(path, progress_callback=seen.append)
    assert ok is True
    result = payload["result"]
    assert isinstance(result, ExtractionResult)
    assert result.total_contacts == 1
    assert seen[0]["stage"] == "worker_boot"
    assert seen[-1]["stage"] == "finalize"
    assert seen[-1]["done"] == seen[-1]["processed"] == 1


def test_member_list_source(record):
    members = [("m.xml", record(sender=("a@example.com", "A")).encode("utf-8"))]
    ok, payload = run_extraction_in_thread(members, extract_from_preview=True)
    assert ok
    assert payload["result"].total_contacts == 1


def test_empty_archive_reports_error(make_olm):
    ok, payload = run_extraction_in_thread(make_olm({"readme.txt": "x"}))
    assert ok is False
    assert payload["error"] == "No XML files found in .olm archive"


def test_missing_file_reports_friendly_error(tmp_path):
    ok, payload = run_extraction_in_thread(str(tmp_path / "missing.olm"))
    assert ok is False
    assert payload["error"] == "File not found. Check the path and try again."
    assert isinstance(payload["exception"], FileNotFoundError)


def test_timeout_is_host_side():
    def slow_members():
        time.sleep(1.0)
        yield ("m.xml", b"<a/>")

    ok, payload = run_extraction_in_thread(slow_members(), timeout_sec=0.1)
    assert ok is False
    assert payload["error"] == "timeout after 0.1s"
