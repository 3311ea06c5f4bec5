"""Test configuration and shared fixtures."""

import sys
import zipfile
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from olmcontacts import cancel_token
from olmcontacts.utils import logging_setup


def make_record(
    *,
    sender: tuple[str, str] | None = None,
    to: list[tuple[str, str]] | None = None,
    cc: list[tuple[str, str]] | None = None,
    preview: str | None = None,
) -> str:
    """Build a minimal OLM message record."""

    def _entries(items):
        return "".join(
            f'<emailAddress OPFContactEmailAddressAddress="{email}" '
            f'OPFContactEmailAddressName="{name}" OPFContactEmailAddressType="0"/>'
            for email, name in items
        )

    parts = ['<?xml version="1.0" encoding="UTF-8"?>', "<emails><email>"]
    if sender is not None:
        parts.append(
            f"<OPFMessageCopyFromAddresses>{_entries([sender])}</OPFMessageCopyFromAddresses>"
        )
    if to:
        parts.append(f"<OPFMessageCopyToAddresses>{_entries(to)}</OPFMessageCopyToAddresses>")
    if cc:
        parts.append(f"<OPFMessageCopyCCAddresses>{_entries(cc)}</OPFMessageCopyCCAddresses>")
    if preview is not None:
        parts.append(f"<OPFMessageCopyPreview>{preview}</OPFMessageCopyPreview>")
    parts.append("</email></emails>")
    return "".join(parts)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.setenv("OLM_LOG_TO_FILE", "0")
    monkeypatch.setenv("OLM_LOG_DIR", str(tmp_path / "logs"))
    for name in (
        "OLM_EXTRACT_FROM_PREVIEW",
        "OLM_FREQUENT_MIN_COUNT",
        "OLM_TOP_N",
        "OLM_PROGRESS_EVERY",
        "OLM_MAX_MEMBER_MB",
        "OLM_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    # CLI tests must not attach handlers to pytest capture streams
    monkeypatch.setattr(logging_setup, "_CONFIGURED", True)
    cancel_token.reset_all()
    yield
    cancel_token.reset_all()


@pytest.fixture
def make_olm(tmp_path):
    """Write ``{member_name: text_or_bytes}`` into a ZIP with an ``.olm`` suffix."""

    def factory(members: dict, name: str = "backup.olm") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for member, payload in members.items():
                data = payload.encode("utf-8") if isinstance(payload, str) else payload
                zf.writestr(member, data)
        return path

    return factory


@pytest.fixture
def record():
    return make_record
