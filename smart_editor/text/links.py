# smart_editor/text/links.py
# URL recognition for pasted text -> link resources.

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from smart_editor.core.document import LinkResource

URL_RE = re.compile(r"^(https?://)?([A-Za-z0-9_.-]+)(:[0-9]+)?(/[^\s]*)?\Z", re.IGNORECASE)
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_DEFAULT_PORTS = {"http": 80, "https": 443}


def with_scheme(text: str) -> str:
    return text if _SCHEME_RE.match(text) else f"https://{text}"


def extract_domain(text: str) -> Optional[str]:
    """Host (with a non-default port) of ``text``, ``www.`` removed. None when it is not parseable."""
    try:
        parts = urlsplit(with_scheme(text))
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not host:
        return None
    if port is not None and _DEFAULT_PORTS.get(parts.scheme.lower()) != port:
        host = f"{host}:{port}"
    return re.sub(r"^www\.", "", host)


def is_url(text: str, strict: bool = False) -> bool:
    """
    True when ``text`` looks like a URL.
    strict (opt-in): a bare word ("hello") only counts when it has a scheme, a dot or is localhost.
    """
    m = URL_RE.match(text)
    if not m or extract_domain(text) is None:
        return False
    if not strict:
        return True
    host = m.group(2).lower()
    return bool(m.group(1)) or "." in host.strip(".") or host == "localhost"


def make_link(text: str, strict: bool = False) -> Optional[LinkResource]:
    """Link resource for pasted ``text``; scheme defaults to https, display is the bare domain."""
    text = text.strip()
    if not text or not is_url(text, strict=strict):
        return None
    return LinkResource(url=with_scheme(text), display=extract_domain(text))
