"""Per-run aggregation of candidates into unique contacts."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, Iterator, List, Optional

from .models import Candidate, Contact


class ContactRegistry:
    """Mapping of lower-cased e-mail address to exactly one :class:`Contact`.

    A registry lives for a single extraction run and is passed explicitly to
    whatever feeds it. Insertion order is kept, so ties in the count-based
    ordering fall back to the order in which addresses were first seen.

    The first non-empty name and the first role win. Both tie-breaks depend
    on the order of observations, so :meth:`observe` is serialised with a
    lock even though the pipeline itself is single-threaded.
    """

    def __init__(self) -> None:
        self._contacts: Dict[str, Contact] = {}
        self._lock = threading.Lock()

    def observe(self, candidate: Candidate) -> Contact:
        """Fold one candidate in and return the contact it landed on."""

        with self._lock:
            existing = self._contacts.get(candidate.email)
            if existing is None:
                contact = Contact(
                    email=candidate.email,
                    name=candidate.name or "",
                    role=candidate.role,
                    count=1,
                )
                self._contacts[candidate.email] = contact
                return contact
            existing.count += 1
            if candidate.name and not existing.name:
                existing.name = candidate.name
            return existing

    def observe_many(self, candidates: Iterable[Candidate]) -> int:
        """Observe every candidate; return how many were folded in."""

        seen = 0
        for candidate in candidates:
            self.observe(candidate)
            seen += 1
        return seen

    def get(self, email: str) -> Optional[Contact]:
        return self._contacts.get(email)

    def __contains__(self, email: object) -> bool:
        return email in self._contacts

    def __len__(self) -> int:
        return len(self._contacts)

    def __iter__(self) -> Iterator[Contact]:
        return iter(list(self._contacts.values()))

    def sorted_contacts(self) -> List[Contact]:
        """Contacts by descending count; stable, so ties keep insertion order."""

        return sorted(self._contacts.values(), key=lambda c: c.count, reverse=True)


__all__ = ["ContactRegistry"]
