"""Tests for the preview text heuristic."""

from __future__ import annotations

from olmcontacts.extraction_preview import (
    extract_preview_candidates,
    extract_preview_from_record,
    preview_to_text,
)
from olmcontacts.models import Candidate, Role


def test_escaped_headers_in_record(record):
    xml = record(
        preview="From: Preview Name &lt;preview@example.com&gt; To: Dest &lt;dest@example.com&gt;"
    )
    assert extract_preview_from_record(xml) == [
        Candidate("preview@example.com", "Preview Name", Role.FROM),
        Candidate("dest@example.com", "Dest", Role.TO),
    ]


def test_cc_and_case_insensitive_keyword():
    found = extract_preview_candidates("thanks!\nCC: Team Lead &lt;Lead@Example.ORG&gt;")
    assert found == [Candidate("lead@example.org", "Team Lead", Role.CC)]


def test_bracket_without_at_sign_is_rejected():
    found = extract_preview_candidates(
        "From: Someone &lt;not-an-address&gt; To: Bob &lt;bob@example.com&gt;"
    )
    assert found == [Candidate("bob@example.com", "Bob", Role.TO)]


def test_no_headers_gives_nothing():
    assert extract_preview_candidates("Just a friendly note, see you soon.") == []


def test_preview_to_text_decodes_entities_and_strips_tags():
    assert preview_to_text("a &amp; b") == "a & b"
    assert preview_to_text("<b>bold</b> text") == "bold text"
    assert preview_to_text("") == ""


def test_unusable_input_never_raises():
    assert extract_preview_candidates("") == []
    assert extract_preview_candidates(None) == []  # type: ignore[arg-type]
    assert extract_preview_candidates(42) == []  # type: ignore[arg-type]


def test_record_without_preview(record):
    assert extract_preview_from_record(record(to=[("a@example.com", "A")])) == []


def test_double_escaped_preview_is_decoded_twice(record):
    xml = record(preview="From: Preview Name &amp;lt;preview@example.com&amp;gt;")
    assert extract_preview_from_record(xml) == [
        Candidate("preview@example.com", "Preview Name", Role.FROM),
    ]
