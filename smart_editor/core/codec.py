# smart_editor/core/codec.py
"""
Surface codec: Document <-> Surface.

to_surface(document, resolve)
    Placeholder tokens become chips in reading order. Mention labels are
    re-resolved through the host (stored labels are not trusted), falling back
    to "Unknown User/Team/Task". Tokens with no matching resource stay as text.

from_surface(surface)
    Chips are numbered in per-type passes - tags, links, users, teams, tasks -
    not in reading order. Persisted documents already depend on this order,
    the tokens in ``text`` still dereference correctly.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from smart_editor.core.colors import tag_class
from smart_editor.core.document import (
    PLACEHOLDER_RE,
    Document,
    Resource,
    id_only,
    is_mention,
    placeholder,
)
from smart_editor.core.protocols import EntityResolver
from smart_editor.core.surface import Chip, Node, Shadow, Surface, TextRun
from smart_editor.text.normalizer import normalize_run

logger = logging.getLogger(__name__)

PASS_ORDER: Tuple[str, ...] = ("tag", "link", "user", "team", "task")

UNKNOWN_LABELS: Dict[str, str] = {
    "user": "Unknown User",
    "team": "Unknown Team",
    "task": "Unknown Task",
}

CHIP_CLASSES: Dict[str, str] = {
    "link": "smartlink-chip",
    "user": "mention-person",
    "team": "mention-person",
    "task": "mention-task",
}


def label_for(resource: Resource, resolve: Optional[EntityResolver] = None) -> str:
    """
    Display label for a resource.
    Tags show their text, links their display. Mentions ask ``resolve`` when
    given, else use the label they carry; misses degrade to "Unknown ...".
    """
    if resource.type == "tag":
        return resource.tag
    if resource.type == "link":
        return resource.display
    label = None
    if resolve is not None:
        try:
            label = resolve(resource.type, resource.key)
        except Exception as e:
            logger.warning("resolver failed for %s %s: %s", resource.type, resource.key, e)
    else:
        label = resource.display
    if not label:
        logger.debug("no label for %s %s", resource.type, resource.key)
        return UNKNOWN_LABELS[resource.type]
    return label


def chip_for(resource: Resource, resolve: Optional[EntityResolver] = None) -> Chip:
    if resource.type == "tag":
        css = tag_class(resource.tag)
    else:
        css = CHIP_CLASSES[resource.type]
    return Chip(resource=resource, label=label_for(resource, resolve), css_class=css)


def to_surface(document: Document, resolve: Optional[EntityResolver] = None) -> Surface:
    """Render a document onto a fresh surface; the caret is left at the end."""
    nodes: List[Node] = []
    buf: List[str] = []
    pos = 0
    text = document.text
    for m in PLACEHOLDER_RE.finditer(text):
        buf.append(text[pos:m.start()])
        pos = m.end()
        idx = int(m.group(1))
        if idx >= len(document.resources):
            logger.debug("placeholder %s has no resource, kept as text", m.group(0))
            buf.append(m.group(0))
            continue
        if any(buf):
            nodes.append(TextRun("".join(buf)))
        buf = []
        nodes.append(chip_for(document.resources[idx], resolve))
    buf.append(text[pos:])
    if any(buf):
        nodes.append(TextRun("".join(buf)))

    surface = Surface(nodes)
    surface.move_end()
    return surface


def from_surface(surface: Surface) -> Document:
    """Derive a valid Document from the surface. Shadows are ignored."""
    nodes = surface.nodes
    index_of: Dict[int, int] = {}
    resources: List[Resource] = []
    for kind in PASS_ORDER:
        for i, n in enumerate(nodes):
            if isinstance(n, Chip) and n.kind == kind:
                index_of[i] = len(resources)
                resources.append(_persisted(n.resource))

    parts: List[str] = []
    pending: List[str] = []  # adjacent runs are cleaned together
    for i, n in enumerate(nodes):
        if isinstance(n, TextRun):
            pending.append(n.text)
        elif isinstance(n, Chip):
            parts.append(normalize_run("".join(pending)))
            pending = []
            parts.append(placeholder(index_of[i]))
        elif isinstance(n, Shadow):
            continue
    parts.append(normalize_run("".join(pending)))

    return Document(text="".join(parts), resources=resources)


def _persisted(resource: Resource) -> Resource:
    # mentions are stored id-only, labels are re-resolved at render time
    return id_only(resource) if is_mention(resource) else resource
