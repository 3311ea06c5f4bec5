"""Read XML message records out of an ``.olm`` archive.

An ``.olm`` file is a plain ZIP container. Already-unpacked backups (a
directory tree) are accepted as well.
"""

from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from . import config
from .utils.errors import ArchiveError

logger = logging.getLogger(__name__)

XML_SUFFIX = ".xml"

# Payload is None when the member could not be read
Member = Tuple[str, Optional[bytes]]


def _max_member_bytes() -> int:
    return int(config.MAX_MEMBER_MB) * 1024 * 1024


def _skip_reason(info: zipfile.ZipInfo, limit: int) -> Optional[str]:
    """Return why ``info`` must not be read, or ``None`` when it is fine."""

    if info.is_dir() or not (info.filename or "").endswith(XML_SUFFIX):
        return "not-xml"
    if info.flag_bits & 0x1:
        return "encrypted"
    if (info.file_size or 0) > limit:
        return "oversized"
    return None


def _open_zip(path: Path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(path)
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Not a valid .olm (ZIP) archive: {path.name}") from exc


def _iter_zip_members(path: Path) -> Iterator[Member]:
    limit = _max_member_bytes()
    with _open_zip(path) as archive:
        for info in archive.infolist():
            reason = _skip_reason(info, limit)
            if reason == "not-xml":
                continue
            if reason:
                logger.warning("skip %s member: %s", reason, info.filename)
                continue
            try:
                payload = archive.read(info)
            except (zipfile.BadZipFile, NotImplementedError, OSError, ValueError) as exc:
                logger.warning("cannot read member %s: %s", info.filename, exc)
                payload = None
            yield info.filename, payload


def _dir_files(root: Path) -> List[Path]:
    limit = _max_member_bytes()
    files: List[Path] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file() or not path.name.endswith(XML_SUFFIX):
            continue
        try:
            size = path.stat().st_size
        except OSError:
            size = 0
        if size > limit:
            logger.warning("skip oversized member: %s (%d bytes)", path, size)
            continue
        files.append(path)
    return files


def _iter_dir_members(root: Path) -> Iterator[Member]:
    for path in _dir_files(root):
        rel = path.relative_to(root).as_posix()
        try:
            payload: Optional[bytes] = path.read_bytes()
        except OSError as exc:
            logger.warning("cannot read member %s: %s", rel, exc)
            payload = None
        yield rel, payload


def _check_source(source: os.PathLike[str] | str) -> Path:
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"File or directory not found: {path}")
    if path.is_file() and path.suffix.lower() != ".olm":
        logger.warning(
            "%s has no .olm extension, trying to read it as a ZIP archive", path.name
        )
    return path


def iter_xml_members(source: os.PathLike[str] | str) -> Iterator[Member]:
    """Yield ``(member_name, raw_bytes)`` for every ``.xml`` record in ``source``.

    Directories, encrypted members and members above ``OLM_MAX_MEMBER_MB``
    are skipped. A member that fails to inflate is yielded with ``None``
    instead of bytes so the caller can count it as a failed record.
    """

    path = _check_source(source)
    if path.is_dir():
        yield from _iter_dir_members(path)
    else:
        yield from _iter_zip_members(path)


def list_xml_members(source: os.PathLike[str] | str) -> List[str]:
    """Return the names :func:`iter_xml_members` would yield, without reading them."""

    path = _check_source(source)
    if path.is_dir():
        return [p.relative_to(path).as_posix() for p in _dir_files(path)]
    limit = _max_member_bytes()
    with _open_zip(path) as archive:
        return [
            info.filename
            for info in archive.infolist()
            if _skip_reason(info, limit) is None
        ]


__all__ = ["Member", "XML_SUFFIX", "iter_xml_members", "list_xml_members"]
