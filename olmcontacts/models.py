"""Data models shared across the extraction engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Header role under which an address was observed."""

    FROM = "from"
    TO = "to"
    CC = "cc"
    BCC = "bcc"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Candidate:
    """A single ``(email, name, role)`` occurrence produced by an extractor.

    Candidates are transient: they are folded into a
    :class:`~olmcontacts.registry.ContactRegistry` and then dropped.
    """

    email: str
    name: str
    role: Role


@dataclass(slots=True)
class Contact:
    """Aggregated view of one unique (lower-cased) e-mail address.

    Parameters
    ----------
    email:
        Normalised address, the registry key.
    name:
        Display name, empty when unknown. The first non-empty name wins.
    role:
        Role of the very first observation.
    count:
        Number of observations across all records.
    """

    email: str
    name: str
    role: Role
    count: int = 1

    def preview(self) -> dict[str, Any]:
        """Short form used in the top-N list."""

        return {"email": self.email, "name": self.name, "count": self.count}


@dataclass(slots=True)
class ExtractionResult:
    """Everything a run hands back to its host."""

    csv_all: str
    csv_frequent: str
    vcard: str
    total_contacts: int
    frequent_contacts: int
    top_contacts: list[dict[str, Any]] = field(default_factory=list)
    files_total: int = 0
    files_processed: int = 0
    parse_errors: int = 0


__all__ = ["Candidate", "Contact", "ExtractionResult", "Role"]
