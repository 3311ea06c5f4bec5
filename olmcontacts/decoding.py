"""Decode raw archive members into text."""

from __future__ import annotations

_UTF16_LE_BOM = 0xFFFE
_UTF16_BE_BOM = 0xFEFF


def decode_member_bytes(data: bytes) -> str:
    """Decode one archive member, honouring a UTF-16 byte-order mark.

    The first two bytes are read as a big-endian 16-bit value: ``0xFFFE``
    selects UTF-16-LE and ``0xFEFF`` UTF-16-BE for the bytes that follow.
    Anything else is UTF-8. Malformed sequences are replaced, never raised.
    """

    if not data:
        return ""
    if len(data) >= 2:
        bom = (data[0] << 8) | data[1]
        if bom == _UTF16_LE_BOM:
            return data[2:].decode("utf-16-le", errors="replace")
        if bom == _UTF16_BE_BOM:
            return data[2:].decode("utf-16-be", errors="replace")
    # utf-8-sig drops a leading UTF-8 BOM if there is one
    return data.decode("utf-8-sig", errors="replace")


__all__ = ["decode_member_bytes"]
