"""Recover participants from the free-text message preview.

Sent items often lack structured recipient containers, but the preview of a
reply or forward still quotes the original headers, e.g.
``From: Jane Doe <jane@example.com> To: Bob <bob@example.com>``. This module
scans that text. It is a heuristic and may produce false positives, so the
pipeline only runs it when explicitly asked to.
"""

from __future__ import annotations

import logging
import re
import warnings
from typing import Iterator, List

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

from .extraction_common import decode_entities, iter_element_bodies
from .models import Candidate, Role

logger = logging.getLogger(__name__)

PREVIEW_ELEMENT = "OPFMessageCopyPreview"

PREVIEW_ROLES = {
    "from": Role.FROM,
    "to": Role.TO,
    "cc": Role.CC,
}

# Не якорим на начало строки: перед заголовками в превью бывает текст ответа
HEADER_RE = re.compile(r"(From|To|Cc):\s*(.+?)\s*<([^>]+)>", re.IGNORECASE)


def preview_to_text(markup: str) -> str:
    """Strip tags from ``markup`` and decode its character references."""

    if not markup:
        return ""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(markup, "html.parser")
    return soup.get_text()


def iter_preview_blocks(xml_text: str) -> Iterator[str]:
    """Yield the raw (still escaped) body of every preview element."""

    yield from iter_element_bodies(xml_text, PREVIEW_ELEMENT)


def _scan(text: str) -> Iterator[Candidate]:
    for match in HEADER_RE.finditer(text):
        role = PREVIEW_ROLES.get(match.group(1).lower())
        email = match.group(3).strip()
        if role is None or "@" not in email:
            continue
        yield Candidate(email=email.lower(), name=match.group(2).strip(), role=role)


def extract_preview_candidates(preview_markup: str) -> List[Candidate]:
    """Return every header-like ``Role: Name <address>`` found in the preview.

    Never raises: unusable input yields an empty list.
    """

    if not isinstance(preview_markup, str) or not preview_markup:
        return []
    try:
        # Превью экспортируется дважды экранированным: &amp;lt; -> &lt; -> <
        return list(_scan(decode_entities(preview_to_text(preview_markup))))
    except Exception:
        logger.debug("preview scan failed", exc_info=True)
        return []


def extract_preview_from_record(xml_text: str) -> List[Candidate]:
    """Run :func:`extract_preview_candidates` over every preview in a record."""

    found: List[Candidate] = []
    for block in iter_preview_blocks(xml_text):
        found.extend(extract_preview_candidates(block))
    return found


__all__ = [
    "HEADER_RE",
    "PREVIEW_ROLES",
    "extract_preview_candidates",
    "extract_preview_from_record",
    "iter_preview_blocks",
    "preview_to_text",
]
