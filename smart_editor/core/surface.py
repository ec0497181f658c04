# smart_editor/core/surface.py
"""
Surface - the live, editable in-memory form of a document.

A Surface is a flat list of nodes plus a caret:
 - TextRun: plain editable text
 - Chip: atomic entity (tag/link/user/team/task). Never entered, only kept or removed whole.
 - Shadow: decorative autocomplete preview right after the caret. Never serialized.

Caret positions follow the DOM convention the editor was modelled on:
 - Position(node=i, offset=k): inside TextRun i, before character k
 - Position(node=None, offset=i): directly in the container, before child i

All index bookkeeping (caret shifting when nodes are inserted, split, merged or
removed) lives here, so the scanner and the session only deal with
positions and spans.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from smart_editor.core.document import Resource


@dataclass
class TextRun:
    text: str = ""


@dataclass
class Chip:
    resource: Resource
    label: str
    css_class: str = ""

    @property
    def kind(self) -> str:
        return self.resource.type


@dataclass
class Shadow:
    text: str


Node = Union[TextRun, Chip, Shadow]


@dataclass(frozen=True)
class Position:
    node: Optional[int]
    offset: int

    @classmethod
    def container(cls, index: int) -> "Position":
        return cls(None, index)

    @property
    def in_text(self) -> bool:
        return self.node is not None


@dataclass(frozen=True)
class Span:
    """Range [start, end) inside a single node."""
    node: int
    start: int
    end: int


class Surface:
    """Ordered node list + caret, with the editing primitives the engine needs."""

    def __init__(self, nodes: Optional[List[Node]] = None, caret: Optional[Position] = None):
        self.nodes: List[Node] = list(nodes or [])
        self.caret: Position = caret or Position.container(0)
        self.caret = self._clamp(self.caret)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"Surface(nodes={self.nodes!r}, caret={self.caret!r})"

    # inspection -------------------------------------------------------
    def text_content(self) -> str:
        """Visible text: runs and chip labels, shadows excluded."""
        out = []
        for n in self.nodes:
            if isinstance(n, TextRun):
                out.append(n.text)
            elif isinstance(n, Chip):
                out.append(n.label)
        return "".join(out)

    def chips(self) -> List[Chip]:
        return [n for n in self.nodes if isinstance(n, Chip)]

    def shadow(self) -> Optional[Shadow]:
        for n in self.nodes:
            if isinstance(n, Shadow):
                return n
        return None

    # caret ------------------------------------------------------------
    def set_caret(self, pos: Position) -> None:
        self.caret = self._clamp(pos)

    def _clamp(self, pos: Position) -> Position:
        if pos.node is None:
            return Position.container(min(max(pos.offset, 0), len(self.nodes)))
        if 0 <= pos.node < len(self.nodes) and isinstance(self.nodes[pos.node], TextRun):
            run = self.nodes[pos.node]
            return Position(pos.node, min(max(pos.offset, 0), len(run.text)))
        return Position.container(min(max(pos.node, 0), len(self.nodes)))

    def end_position(self) -> Position:
        if self.nodes and isinstance(self.nodes[-1], TextRun):
            last = len(self.nodes) - 1
            return Position(last, len(self.nodes[last].text))
        return Position.container(len(self.nodes))

    def move_end(self) -> None:
        self.caret = self.end_position()

    def move_home(self) -> None:
        self.caret = Position.container(0)

    def _boundary_index(self, pos: Position, after: bool) -> int:
        """Container index equivalent to a caret at a run edge."""
        if pos.node is None:
            return pos.offset
        return pos.node + 1 if after else pos.node

    def move_left(self) -> None:
        pos = self.caret
        if pos.in_text and pos.offset > 0:
            self.caret = Position(pos.node, pos.offset - 1)
            return
        c = self._boundary_index(pos, after=False)
        if c == 0:
            return
        prev = self.nodes[c - 1]
        if isinstance(prev, TextRun) and prev.text:
            self.caret = Position(c - 1, len(prev.text) - 1)
        else:
            self.caret = Position.container(c - 1)

    def move_right(self) -> None:
        pos = self.caret
        if pos.in_text and pos.offset < len(self.nodes[pos.node].text):
            self.caret = Position(pos.node, pos.offset + 1)
            return
        c = self._boundary_index(pos, after=True)
        if c >= len(self.nodes):
            return
        nxt = self.nodes[c]
        if isinstance(nxt, TextRun) and nxt.text:
            self.caret = Position(c, 1)
        else:
            self.caret = Position.container(c + 1)

    # low-level node bookkeeping ---------------------------------------
    def _insert_nodes(self, index: int, new: List[Node]) -> None:
        k = len(new)
        self.nodes[index:index] = new
        c = self.caret
        if c.node is not None and c.node >= index:
            self.caret = Position(c.node + k, c.offset)
        elif c.node is None and c.offset > index:
            self.caret = Position.container(c.offset + k)

    def _remove_nodes(self, index: int, count: int = 1) -> None:
        del self.nodes[index:index + count]
        c = self.caret
        if c.node is not None:
            if index <= c.node < index + count:
                self.caret = Position.container(index)
            elif c.node >= index + count:
                self.caret = Position(c.node - count, c.offset)
        elif c.offset > index:
            self.caret = Position.container(max(index, c.offset - count))

    def _split_at(self, pos: Position) -> int:
        """Make ``pos`` a node boundary and return the container index there."""
        if pos.node is None:
            return pos.offset
        run = self.nodes[pos.node]
        o = pos.offset
        if o <= 0:
            return pos.node
        if o >= len(run.text):
            return pos.node + 1
        left, right = run.text[:o], run.text[o:]
        run.text = left
        self._insert_nodes(pos.node + 1, [TextRun(right)])
        # a caret past the split point belongs to the new right-hand run
        c = self.caret
        if c.node == pos.node and c.offset > o:
            self.caret = Position(pos.node + 1, c.offset - o)
        return pos.node + 1

    def _merge_runs(self, index: int) -> None:
        """Merge TextRun index+1 into TextRun index."""
        left, right = self.nodes[index], self.nodes[index + 1]
        base = len(left.text)
        left.text += right.text
        c = self.caret
        if c.node == index + 1:
            self.caret = Position(index, base + c.offset)
        elif c.node is None and c.offset == index + 1:
            self.caret = Position(index, base)
        self._remove_nodes(index + 1)

    # editing primitives -----------------------------------------------
    def clear(self) -> None:
        self.nodes = []
        self.caret = Position.container(0)

    def insert_node(self, node: Node, at: Optional[Position] = None) -> Position:
        """Insert ``node`` at ``at`` (default: caret), place the caret after it and return that position."""
        idx = self._split_at(at if at is not None else self.caret)
        self._insert_nodes(idx, [node])
        if isinstance(node, TextRun):
            self.caret = Position(idx, len(node.text))
        else:
            self.caret = Position.container(idx + 1)
        return self.caret

    def insert_text(self, text: str) -> None:
        """Type ``text`` at the caret (merging into the neighbouring run when there is one)."""
        if not text:
            return
        c = self.caret
        if c.node is not None:
            run = self.nodes[c.node]
            run.text = run.text[:c.offset] + text + run.text[c.offset:]
            self.caret = Position(c.node, c.offset + len(text))
            return
        i = c.offset
        if i > 0 and isinstance(self.nodes[i - 1], TextRun):
            run = self.nodes[i - 1]
            run.text += text
            self.caret = Position(i - 1, len(run.text))
        elif i < len(self.nodes) and isinstance(self.nodes[i], TextRun):
            run = self.nodes[i]
            run.text = text + run.text
            self.caret = Position(i, len(text))
        else:
            self._insert_nodes(i, [TextRun(text)])
            self.caret = Position(i, len(text))

    def delete_span(self, span: Span) -> Position:
        """Remove the spanned content and return where it was. Spans over a chip remove the whole chip."""
        node = self.nodes[span.node]
        if not isinstance(node, TextRun):
            self._remove_nodes(span.node)
            return Position.container(span.node)
        node.text = node.text[:span.start] + node.text[span.end:]
        c = self.caret
        if c.node == span.node:
            if c.offset >= span.end:
                self.caret = Position(c.node, c.offset - (span.end - span.start))
            elif c.offset > span.start:
                self.caret = Position(c.node, span.start)
        return Position(span.node, span.start)

    def replace_span(self, span: Span, *nodes: Node) -> Position:
        """Replace a span with ``nodes`` in order; the caret ends after the last one."""
        at = self.delete_span(span)
        self.caret = self._clamp(at)
        for n in nodes:
            at = self.insert_node(n, at)
        return self.caret

    def remove_node(self, index: int) -> Node:
        node = self.nodes[index]
        self._remove_nodes(index)
        return node

    def delete_backward(self) -> bool:
        """Default Backspace: remove one character before the caret. Chips are removed whole."""
        c = self.caret
        if c.node is not None and c.offset > 0:
            run = self.nodes[c.node]
            run.text = run.text[:c.offset - 1] + run.text[c.offset:]
            self.caret = Position(c.node, c.offset - 1)
            return True
        i = self._boundary_index(c, after=False)
        if i == 0:
            return False
        prev = self.nodes[i - 1]
        if isinstance(prev, TextRun):
            if not prev.text:
                self._remove_nodes(i - 1)
                return self.delete_backward()
            prev.text = prev.text[:-1]
            self.caret = Position(i - 1, len(prev.text))
            return True
        self._remove_nodes(i - 1)
        return True

    def chip_before_caret(self) -> Optional[int]:
        """
        Index of the chip the caret sits right after, if any:
         - caret at offset 0 of a run whose previous sibling is a chip
         - caret in the container right after a chip child
        """
        c = self.caret
        if c.node is not None:
            if c.offset != 0:
                return None
            prev = c.node - 1
        else:
            prev = c.offset - 1
        if prev >= 0 and isinstance(self.nodes[prev], Chip):
            return prev
        return None

    # shadow -----------------------------------------------------------
    def remove_shadow(self) -> bool:
        """Drop every shadow node, re-joining the text runs it separated."""
        removed = False
        i = 0
        while i < len(self.nodes):
            if not isinstance(self.nodes[i], Shadow):
                i += 1
                continue
            self._remove_nodes(i)
            removed = True
            if 0 < i < len(self.nodes) and isinstance(self.nodes[i - 1], TextRun) \
                    and isinstance(self.nodes[i], TextRun):
                self._merge_runs(i - 1)
        return removed

    def insert_shadow(self, text: str) -> None:
        """Place a shadow right after the caret without moving the caret."""
        c = self.caret
        if c.node is not None and c.offset == 0:
            self.caret = c = Position.container(c.node)
        idx = self._split_at(c)
        self._insert_nodes(idx, [Shadow(text)])
