# smart_editor/core/scanner.py
"""
Cursor-relative word detection.

word_before_cursor() is the one place that decides "what did the user just
type": tag completion, tag/entity conversion on Space/Enter, @mention
detection and Tab all read its result instead of re-parsing text themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from smart_editor.core.surface import Chip, Position, Span, Surface, TextRun

# word characters are ASCII only, as in the web client that wrote the stored data
_WORD = "[A-Za-z0-9_]"
WORD_RE = re.compile(rf"(#{_WORD}+|@{_WORD}+|\S+)\Z")


@dataclass(frozen=True)
class ScannedWord:
    word: str
    span: Span

    @property
    def is_tag(self) -> bool:
        return self.word.startswith("#")

    @property
    def is_mention(self) -> bool:
        return self.word.startswith("@")


def word_before_cursor(surface: Surface, position: Optional[Position] = None) -> Optional[ScannedWord]:
    """
    Longest trailing ``#word``, ``@word`` or non-space run before ``position``
    (default: the caret), with the exact span it occupies.

    A caret directly in the container looks at the child before it: a text run
    is read up to its end, a chip is read through its label (the span then
    covers the chip, which callers replace as a whole). A container caret at
    offset 0 has nothing before it and yields None.
    """
    pos = position if position is not None else surface.caret
    node_idx = pos.node
    offset = pos.offset

    if node_idx is None:
        if offset <= 0:
            return None
        node_idx = offset - 1
        child = surface.nodes[node_idx]
        if isinstance(child, TextRun):
            offset = len(child.text)
        elif isinstance(child, Chip):
            offset = len(child.label)
        else:
            return None

    node = surface.nodes[node_idx]
    if isinstance(node, TextRun):
        text = node.text
    elif isinstance(node, Chip):
        text = node.label
    else:
        return None

    m = WORD_RE.search(text[:offset])
    if not m:
        return None
    word = m.group(0)
    return ScannedWord(word=word, span=Span(node_idx, offset - len(word), offset))
