"""Serialise contacts to CSV and vCard text."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .models import Contact, ExtractionResult
from .registry import ContactRegistry

logger = logging.getLogger(__name__)

CSV_HEADER = ("Email", "Name", "Source", "Message Count")
VCARD_EOL = "\r\n"

CSV_ALL_NAME = "contacts.csv"
CSV_FREQUENT_NAME = "contacts-frequent.csv"
VCARD_NAME = "contacts.vcf"


def to_csv(contacts: Iterable[Contact]) -> str:
    """Render ``contacts`` (already ordered) as CSV text with a header row.

    Fields are quoted only when they contain a comma, a double quote or a
    newline; inner quotes are doubled. The text has no trailing newline.
    """

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for contact in contacts:
        writer.writerow(
            [contact.email, contact.name or "", contact.role.value, contact.count]
        )
    # Rows are joined by "\n"; no terminator after the last one
    return buf.getvalue()[: -len("\n")]


def split_name(name: str) -> Tuple[str, str]:
    """Split a display name into ``(family, given)``.

    The last whitespace-separated token is the family name and the rest is
    the given name. A single token is all given name.
    """

    parts = (name or "").split()
    if len(parts) > 1:
        return parts[-1], " ".join(parts[:-1])
    return "", " ".join(parts)


def _vcard_record(contact: Contact) -> str:
    if contact.name:
        family, given = split_name(contact.name)
        fn_line = f"FN:{contact.name}"
        n_line = f"N:{family};{given};;;"
    else:
        fn_line = f"FN:{contact.email}"
        n_line = "N:;;;;"
    return VCARD_EOL.join(
        [
            "BEGIN:VCARD",
            "VERSION:3.0",
            fn_line,
            n_line,
            f"EMAIL;TYPE=INTERNET:{contact.email}",
            f"NOTE:Source: {contact.role.value}, Messages: {contact.count}",
            "END:VCARD",
        ]
    )


def to_vcard(contacts: Iterable[Contact]) -> str:
    """Render ``contacts`` as vCard 3.0 records joined by CRLF."""

    return VCARD_EOL.join(_vcard_record(c) for c in contacts)


def frequent_contacts(contacts: Iterable[Contact], min_count: int = 3) -> List[Contact]:
    return [c for c in contacts if c.count >= min_count]


def build_outputs(
    registry: ContactRegistry,
    *,
    min_count: int = 3,
    top_n: int = 10,
) -> Dict[str, Any]:
    """Render every output blob from a single stable ordering of ``registry``."""

    ordered = registry.sorted_contacts()
    frequent = frequent_contacts(ordered, min_count)
    return {
        "csv_all": to_csv(ordered),
        "csv_frequent": to_csv(frequent),
        "vcard": to_vcard(ordered),
        "total_contacts": len(ordered),
        "frequent_contacts": len(frequent),
        "top_contacts": [c.preview() for c in ordered[: max(0, top_n)]],
    }


def write_outputs(result: ExtractionResult, out_dir: Path | str) -> Sequence[Path]:
    """Write the three output files to ``out_dir`` and return their paths."""

    target = Path(out_dir)
    target.mkdir(parents=True, exist_ok=True)
    files = (
        (target / CSV_ALL_NAME, result.csv_all),
        (target / CSV_FREQUENT_NAME, result.csv_frequent),
        (target / VCARD_NAME, result.vcard),
    )
    written: List[Path] = []
    for path, payload in files:
        # newline="" keeps the CRLF endings of vCard records intact
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(payload)
        written.append(path)
        logger.info("wrote %s (%d bytes)", path, len(payload.encode("utf-8")))
    return written


__all__ = [
    "CSV_HEADER",
    "build_outputs",
    "frequent_contacts",
    "split_name",
    "to_csv",
    "to_vcard",
    "write_outputs",
]
