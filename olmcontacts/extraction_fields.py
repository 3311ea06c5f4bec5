"""Pull addresses out of the structured address containers of an OLM record.

An OLM message record stores its participants in a handful of container
elements, each holding ``<emailAddress .../>`` entries::

    <OPFMessageCopyToAddresses>
      <emailAddress OPFContactEmailAddressAddress="jane@example.com"
                    OPFContactEmailAddressName="Jane Doe" />
    </OPFMessageCopyToAddresses>

Only the containers listed in :data:`ADDRESS_CONTAINERS` are looked at. The
scan is regex based, so it works on truncated or otherwise malformed XML
that a strict parser would reject.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from .extraction_common import decode_entities, iter_element_bodies
from .models import Candidate, Role

ADDRESS_CONTAINERS: Tuple[Tuple[str, Role], ...] = (
    ("OPFMessageCopyFromAddresses", Role.FROM),
    ("OPFMessageCopyToAddresses", Role.TO),
    ("OPFMessageCopyCCAddresses", Role.CC),
    ("OPFMessageCopyBCCAddresses", Role.BCC),
    ("OPFMessageCopyReplyToAddresses", Role.FROM),
)

ADDRESS_ATTR = "OPFContactEmailAddressAddress"
NAME_ATTR = "OPFContactEmailAddressName"

_ENTRY_RE = re.compile(r"<emailAddress\b[^>]*>", re.IGNORECASE)


def _attr_pattern(attr: str) -> re.Pattern[str]:
    return re.compile(
        rf"(?<![\w-]){attr}\s*=\s*([\"'])(.*?)\1",
        re.IGNORECASE | re.DOTALL,
    )


_ADDRESS_RE = _attr_pattern(ADDRESS_ATTR)
_NAME_RE = _attr_pattern(NAME_ATTR)


def _read_attr(pattern: re.Pattern[str], tag: str) -> Optional[str]:
    match = pattern.search(tag)
    if match is None:
        return None
    return match.group(2)


def parse_address_entry(tag: str, role: Role) -> Optional[Candidate]:
    """Turn one ``<emailAddress ...>`` start tag into a :class:`Candidate`.

    Returns ``None`` when the address attribute is missing or has no ``@``.
    """

    raw_email = _read_attr(_ADDRESS_RE, tag)
    if raw_email is None or "@" not in raw_email:
        return None
    email = decode_entities(raw_email).strip().lower()
    raw_name = _read_attr(_NAME_RE, tag)
    name = decode_entities(raw_name) if raw_name else ""
    return Candidate(email=email, name=name, role=role)


def iter_field_candidates(xml_text: str) -> Iterator[Candidate]:
    """Yield a candidate for every accepted entry, container by container."""

    if not isinstance(xml_text, str) or not xml_text:
        return
    for container, role in ADDRESS_CONTAINERS:
        for body in iter_element_bodies(xml_text, container):
            for tag_match in _ENTRY_RE.finditer(body):
                candidate = parse_address_entry(tag_match.group(0), role)
                if candidate is not None:
                    yield candidate


def extract_field_candidates(xml_text: str) -> List[Candidate]:
    """List form of :func:`iter_field_candidates`."""

    return list(iter_field_candidates(xml_text))


__all__ = [
    "ADDRESS_CONTAINERS",
    "extract_field_candidates",
    "iter_field_candidates",
    "parse_address_entry",
]
