"""Helpers shared by the structured and preview extractors."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterator

# Only the five entities the OLM exporter emits. Decoded in a single pass so
# that "&amp;lt;" becomes "&lt;" and not "<".
_ENTITIES = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "#39": "'",
}
_ENTITY_RE = re.compile(r"&(lt|gt|amp|quot|#39);")


def decode_entities(text: str) -> str:
    """Replace ``&lt; &gt; &amp; &quot; &#39;`` with their characters."""

    if not text or "&" not in text:
        return text or ""
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(1)], text)


@lru_cache(maxsize=None)
def element_pattern(tag: str) -> re.Pattern[str]:
    """Compile a regex matching ``<tag ...>body</tag>`` (case-insensitive).

    Self-closing ``<tag/>`` elements are not matched: they have no body and
    would otherwise swallow everything up to the next closing tag.
    """

    name = re.escape(tag)
    return re.compile(
        rf"<{name}(?:\s[^>]*)?(?<!/)>(.*?)</{name}\s*>",
        re.IGNORECASE | re.DOTALL,
    )


def iter_element_bodies(text: str, tag: str) -> Iterator[str]:
    """Yield the raw body of every ``tag`` element found anywhere in ``text``."""

    if not isinstance(text, str) or not text:
        return
    for match in element_pattern(tag).finditer(text):
        yield match.group(1)


__all__ = ["decode_entities", "element_pattern", "iter_element_bodies"]
