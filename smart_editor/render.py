# smart_editor/render.py
"""
Read-only rendering of a Document (the non-editing view of a todo or message).

segments()       -> flat list of text/entity segments, UI agnostic
to_rich_text()   -> rich.text.Text with tag pills, link styling and mentions
to_plain_text()  -> "#tag", "@Name" and link domains inlined, for notifications/prompts

Mention labels are resolved at render time; misses show "Unknown User/Team/Task".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from rich.style import Style
from rich.text import Text

from smart_editor.core.codec import CHIP_CLASSES, label_for
from smart_editor.core.colors import tag_class, tag_color
from smart_editor.core.document import PLACEHOLDER_RE, Document
from smart_editor.core.protocols import EntityResolver

# palette name -> terminal colour
RICH_COLORS = {
    "gray": "grey50",
    "red": "red",
    "yellow": "yellow",
    "green": "green",
    "blue": "blue",
    "indigo": "slate_blue3",
    "purple": "purple",
    "pink": "hot_pink",
}

MENTION_STYLES = {
    "user": "bold magenta",
    "team": "bold magenta",
    "task": "bold cyan",
}


@dataclass(frozen=True)
class Segment:
    kind: str             # "text" or a resource type
    text: str             # visible text / label
    target: Optional[str] = None   # tag, url or entity id
    css_class: str = ""


def segments(document: Document, resolve: Optional[EntityResolver] = None) -> List[Segment]:
    out: List[Segment] = []
    pos = 0
    text = document.text
    for m in PLACEHOLDER_RE.finditer(text):
        idx = int(m.group(1))
        if idx >= len(document.resources):
            continue
        if m.start() > pos:
            out.append(Segment("text", text[pos:m.start()]))
        pos = m.end()
        res = document.resources[idx]
        css = tag_class(res.tag) if res.type == "tag" else CHIP_CLASSES[res.type]
        out.append(Segment(res.type, label_for(res, resolve), res.key, css))
    if pos < len(text):
        out.append(Segment("text", text[pos:]))
    return _merge_text(out)


def _merge_text(segs: List[Segment]) -> List[Segment]:
    merged: List[Segment] = []
    for s in segs:
        if merged and s.kind == "text" and merged[-1].kind == "text":
            merged[-1] = Segment("text", merged[-1].text + s.text)
        else:
            merged.append(s)
    return merged


def to_rich_text(document: Document, resolve: Optional[EntityResolver] = None) -> Text:
    out = Text()
    for seg in segments(document, resolve):
        if seg.kind == "text":
            out.append(seg.text)
        elif seg.kind == "tag":
            color = RICH_COLORS[tag_color(seg.target)]
            out.append(f" {seg.text} ", style=f"bold white on {color}")
        elif seg.kind == "link":
            out.append(seg.text, style=Style(color="cyan", underline=True, link=seg.target))
        else:
            out.append(seg.text, style=MENTION_STYLES[seg.kind])
    return out


def to_plain_text(document: Document, resolve: Optional[EntityResolver] = None) -> str:
    parts = []
    for seg in segments(document, resolve):
        if seg.kind == "tag":
            parts.append(f"#{seg.text}")
        elif seg.kind in MENTION_STYLES:
            parts.append(f"@{seg.text}")
        else:
            parts.append(seg.text)
    return "".join(parts)
