# smart_editor/core/colors.py
# Deterministic tag colouring: same tag text -> same palette entry, every session.

from __future__ import annotations

from typing import Tuple

PALETTE: Tuple[str, ...] = (
    "gray",
    "red",
    "yellow",
    "green",
    "blue",
    "indigo",
    "purple",
    "pink",
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def tag_hash(tag: str) -> int:
    """
    String hash ``hash = code + ((hash << 5) - hash)``.

    The shift works on the signed 32-bit value of ``hash`` and yields a signed
    32-bit result; the add/subtract do not wrap. This matches the colours
    already shown by the web client for the same tags.
    """
    h = 0
    for ch in tag:
        # UTF-16 code units, so astral characters hash the same as in a browser
        for unit in _utf16_units(ch):
            h = unit + (_to_int32(_to_int32(h) << 5) - h)
    return h


def _utf16_units(ch: str):
    code = ord(ch)
    if code < 0x10000:
        return (code,)
    code -= 0x10000
    return (0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF))


def tag_color(tag: str) -> str:
    return PALETTE[abs(tag_hash(tag)) % len(PALETTE)]


def tag_class(tag: str) -> str:
    """Style class carried by tag chips, e.g. ``tag-pill tag-pill-blue``."""
    return f"tag-pill tag-pill-{tag_color(tag)}"
