"""Run orchestration: archive members in, contact lists out."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Iterable, Optional

from . import config
from .archive import Member, iter_xml_members, list_xml_members, XML_SUFFIX
from .cancel_token import is_cancelled
from .decoding import decode_member_bytes
from .exporters import build_outputs
from .extraction_fields import iter_field_candidates
from .extraction_preview import extract_preview_from_record
from .models import ExtractionResult
from .registry import ContactRegistry
from .utils.errors import EmptyArchiveError, ExtractionCancelled

logger = logging.getLogger(__name__)

ProgressCB = Optional[Callable[[Dict[str, Any]], None]]

# Сколько ошибок разбора пишем в лог на уровне warning, остальные в debug
_LOUD_PARSE_ERRORS = 3


def _percent(processed: int, total: int) -> int:
    if total <= 0:
        return 100
    return int(round(processed * 100 / total))


def _emit(callback: ProgressCB, snapshot: Dict[str, Any]) -> None:
    if callback is None:
        return
    try:
        callback(dict(snapshot))
    except Exception:  # progress is advisory, never fatal
        logger.debug("progress callback failed", exc_info=True)


def process_member(
    name: str,
    raw: Optional[bytes],
    registry: ContactRegistry,
    *,
    extract_from_preview: bool = False,
) -> int:
    """Decode one record and fold its candidates into ``registry``.

    Returns the number of candidates observed. Raises on unreadable input so
    the caller can count the failure.
    """

    if raw is None:
        raise ValueError(f"member {name} could not be read")
    text = decode_member_bytes(raw)
    observed = registry.observe_many(iter_field_candidates(text))
    if extract_from_preview:
        observed += registry.observe_many(extract_preview_from_record(text))
    return observed


def extract_contacts(
    members: Iterable[Member],
    *,
    total: Optional[int] = None,
    extract_from_preview: bool = False,
    progress_callback: ProgressCB = None,
    progress_every: Optional[int] = None,
    min_count: Optional[int] = None,
    top_n: Optional[int] = None,
) -> ExtractionResult:
    """Extract contacts from ``(member_name, raw_bytes)`` pairs.

    Members whose name does not end in ``.xml`` are ignored. When ``total``
    is not given the members are materialised to count them; pass it to
    stream large archives.

    Raises :class:`EmptyArchiveError` when there is nothing to process and
    :class:`ExtractionCancelled` when the cancel token is set between two
    records. A record that fails to decode or parse is skipped and counted
    in ``parse_errors``.
    """

    every = progress_every or config.PROGRESS_EVERY
    min_count = config.FREQUENT_MIN_COUNT if min_count is None else min_count
    top_n = config.TOP_N if top_n is None else top_n

    xml_members: Iterable[Member]
    if total is None:
        xml_members = [m for m in members if str(m[0]).endswith(XML_SUFFIX)]
        total = len(xml_members)
    else:
        xml_members = (m for m in members if str(m[0]).endswith(XML_SUFFIX))
    if total == 0:
        raise EmptyArchiveError()

    logger.info(
        "extracting contacts from %d records (preview=%s)", total, extract_from_preview
    )
    registry = ContactRegistry()
    processed = 0
    parse_errors = 0

    for name, raw in xml_members:
        if is_cancelled():
            raise ExtractionCancelled(f"cancelled after {processed} of {total} records")
        try:
            process_member(name, raw, registry, extract_from_preview=extract_from_preview)
        except Exception as exc:
            parse_errors += 1
            level = logging.WARNING if parse_errors <= _LOUD_PARSE_ERRORS else logging.DEBUG
            logger.log(level, "record parse failed for %s: %s", name, exc)
        processed += 1

        if processed % every == 0 and processed < total:
            snapshot = {
                "stage": "progress",
                "processed": processed,
                "total": total,
                "contacts_found": len(registry),
                "percent": _percent(processed, total),
            }
            logger.debug("progress %s", snapshot)
            _emit(progress_callback, snapshot)

    _emit(
        progress_callback,
        {
            "stage": "finalize",
            "processed": processed,
            "total": total,
            "contacts_found": len(registry),
            "percent": 100,
        },
    )

    outputs = build_outputs(registry, min_count=min_count, top_n=top_n)
    logger.info(
        "processed %d records, %d unique contacts, %d parse errors",
        processed,
        outputs["total_contacts"],
        parse_errors,
    )
    return ExtractionResult(
        files_total=total,
        files_processed=processed,
        parse_errors=parse_errors,
        **outputs,
    )


def extract_from_path(
    source: os.PathLike[str] | str,
    **kwargs: Any,
) -> ExtractionResult:
    """Run :func:`extract_contacts` over an ``.olm`` file or unpacked directory."""

    total = len(list_xml_members(source))
    return extract_contacts(iter_xml_members(source), total=total, **kwargs)


__all__ = ["ProgressCB", "extract_contacts", "extract_from_path", "process_member"]
