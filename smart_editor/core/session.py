# smart_editor/core/session.py
"""
EditorSession - one live editing session over a Surface.

Owns the surface for the lifetime of an editor instance and turns host UI
events (key presses, typed text, paste, blur) into surface edits, chip
conversions and submissions.

States:
    IDLE              normal editing
    AWAITING_MENTION  an @word was detected and handed to the host's picker;
                      submit (Enter/blur) is suppressed until the host calls
                      insert_mention() or cancel_mention()

Key handling order for key_down():
    1. Tab on a #word      -> commit tag suggestion (always consumed)
    2. Space / Enter       -> grammar conversion of the word before the caret
    3. Enter (no shift)    -> submit; never forwarded to on_key_down
    4. on_key_down(event)  -> host hook, may prevent_default()
    5. default edit        -> atomic chip Backspace, char delete, caret moves, typing

Host API: clear, focus, set_value, get_value, cancel_mention, insert_mention.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from smart_editor.core.codec import chip_for, from_surface, to_surface
from smart_editor.core.document import Document, TagResource, coerce_resource
from smart_editor.core.errors import MentionStateError
from smart_editor.core.protocols import (
    BlurHandler,
    ChangeHandler,
    EntityResolver,
    KeyDownHandler,
    MentionHandler,
    SubmitHandler,
)
from smart_editor.core.scanner import ScannedWord, word_before_cursor
from smart_editor.core.suggestions import TagSuggester
from smart_editor.core.surface import Span, Surface, TextRun
from smart_editor.grammar import EntityGrammar, default_grammar
from smart_editor.text.links import make_link

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_MENTION = "awaiting_mention"


@dataclass
class KeyEvent:
    """
    Host key press. ``key`` uses browser key names:
    "Tab", "Enter", " ", "Backspace", "ArrowLeft", "ArrowRight", "Home", "End",
    or a single printable character.
    """
    key: str
    shift: bool = False
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class MentionRequest:
    """MentionApi handed to on_mention, bound to the session's pending @range."""

    def __init__(self, session: "EditorSession", query: str, span: Span):
        self._session = session
        self.query = query
        self.span = span

    def insert_mention(self, entity: Any) -> None:
        self._session.insert_mention(entity)

    def cancel_mention(self) -> None:
        self._session.cancel_mention()

    def __repr__(self) -> str:
        return f"<MentionRequest query={self.query!r}>"


class EditorSession:

    def __init__(
        self,
        *,
        resolver: Optional[EntityResolver] = None,
        on_submit: Optional[SubmitHandler] = None,
        on_change: Optional[ChangeHandler] = None,
        on_blur: Optional[BlurHandler] = None,
        on_key_down: Optional[KeyDownHandler] = None,
        on_mention: Optional[MentionHandler] = None,
        available_tags: Iterable[str] = (),
        grammar: Optional[EntityGrammar] = None,
        initial_value: Optional[Document] = None,
        autofocus: bool = False,
        disabled: bool = False,
        strict_links: bool = False,
    ):
        self.resolver = resolver
        self.on_submit = on_submit
        self.on_change = on_change
        self.on_blur = on_blur
        self.on_key_down = on_key_down
        self.on_mention = on_mention
        self.grammar = grammar or default_grammar()
        self.suggester = TagSuggester(available_tags)
        self.disabled = disabled
        self.strict_links = strict_links
        self.focused = False

        self.surface = Surface()
        self._pending: Optional[Span] = None

        if initial_value is not None:
            self.set_value(initial_value)
        if autofocus and not disabled:
            self.focus()

    # state ------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return SessionState.IDLE if self._pending is None else SessionState.AWAITING_MENTION

    @property
    def pending_mention(self) -> Optional[Span]:
        return self._pending

    # host API ---------------------------------------------------------
    def clear(self) -> None:
        self.surface.clear()
        self._pending = None

    def focus(self) -> None:
        self.focused = True
        self.surface.move_end()

    def set_value(self, document: Document) -> None:
        self.surface = to_surface(document, self.resolver)
        self._pending = None

    def get_value(self) -> Document:
        return from_surface(self.surface)

    def set_available_tags(self, tags: Iterable[str]) -> None:
        self.suggester.update_tags(tags)

    def cancel_mention(self) -> None:
        if self._pending is not None:
            logger.debug("mention cancelled -> %s", SessionState.IDLE.value)
        self._pending = None

    def insert_mention(self, entity: Any) -> None:
        """
        Replace the pending @word with a chip for ``entity`` plus a space.
        ``entity`` is a Resource (or its persisted dict) carrying the label to show.
        """
        if self._pending is None:
            raise MentionStateError("No reference to a mentioning range")
        resource = coerce_resource(entity)
        self.surface.remove_shadow()
        span = self._live_mention_span(self._pending)
        chip = chip_for(resource)
        if span is not None:
            self.surface.replace_span(span, chip, TextRun(" "))
        else:
            logger.warning("pending mention range is gone, inserting at caret")
            self.surface.insert_node(chip)
            self.surface.insert_node(TextRun(" "))
        self._pending = None
        self.focused = True
        logger.debug("mention inserted (%s %s) -> %s", resource.type, resource.key, SessionState.IDLE.value)

    def _live_mention_span(self, span: Span) -> Optional[Span]:
        """The stored span if it still covers an @word, else the @word at the caret."""
        nodes = self.surface.nodes
        if 0 <= span.node < len(nodes) and isinstance(nodes[span.node], TextRun):
            text = nodes[span.node].text
            if span.end <= len(text) and text[span.start:span.end].startswith("@"):
                return span
        scanned = self._scan()
        if scanned and scanned.is_mention:
            return scanned.span
        return None

    # events -----------------------------------------------------------
    def type_text(self, text: str) -> None:
        """User input at the caret (one keystroke or an IME commit)."""
        if self.disabled or not text:
            return
        self.surface.remove_shadow()
        self.surface.insert_text(text)
        self._on_input()

    def key_down(self, event: KeyEvent) -> bool:
        """Handle a key press. Returns True when the default action was prevented."""
        if self.disabled:
            return False
        self.surface.remove_shadow()
        key = event.key
        submit_key = key == "Enter" and not event.shift
        already_submitted = False

        if key == "Tab":
            scanned = self._scan()
            if scanned and scanned.is_tag:
                event.prevent_default()
                self._commit_suggestion(scanned)
                return True

        if key == " " or submit_key:
            scanned = self._scan()
            if scanned:
                resource = self.grammar.convert(scanned.word)
                if resource is not None:
                    chip = chip_for(resource, self.resolver)
                    logger.debug("converted %r to %s chip", scanned.word, resource.type)
                    if submit_key:
                        self.surface.replace_span(scanned.span, chip)
                        self._emit_change()
                        already_submitted = True
                    else:
                        event.prevent_default()
                        self.surface.replace_span(scanned.span, chip, TextRun(" "))
                        return True

        if key == "Enter":
            if submit_key and self.on_submit is not None:
                event.prevent_default()
                if not already_submitted:
                    self._emit_change()
                return True
            self.surface.insert_text("\n")
            self._on_input()
            return False

        if self.on_key_down is not None:
            self.on_key_down(event)
            if event.default_prevented:
                return True

        return self._default_action(event)

    def paste(self, text: str, html: Optional[str] = None) -> None:
        """
        Clipboard paste. A URL becomes a link chip plus a space; anything else is
        inserted as plain text. ``html`` is accepted and discarded.
        """
        if self.disabled or not text:
            return
        self.surface.remove_shadow()
        link = make_link(text, strict=self.strict_links)
        if link is not None:
            self.surface.insert_node(chip_for(link))
            self.surface.insert_node(TextRun(" "))
            logger.debug("pasted link %s", link.url)
            return
        if html:
            logger.debug("discarding pasted markup (%d chars)", len(html))
        self.surface.insert_text(text)
        self._on_input()

    def blur(self, app_has_focus: bool = True) -> bool:
        """
        Focus left the editor. Ignored while a mention is pending or when the whole
        app lost focus; otherwise submits like Enter. Returns True when handled.
        """
        if self._pending is not None or not app_has_focus:
            return False
        self.surface.remove_shadow()
        self.focused = False
        self._emit_change()
        if self.on_blur is not None:
            self.on_blur()
        return True

    # internals --------------------------------------------------------
    def _scan(self) -> Optional[ScannedWord]:
        return word_before_cursor(self.surface)

    def _on_input(self) -> None:
        self._update_shadow()
        self._check_for_mention()

    def _update_shadow(self) -> None:
        self.surface.remove_shadow()
        scanned = self._scan()
        if not scanned or not scanned.is_tag:
            return
        rest = self.suggester.shadow_text(scanned.word)
        if rest:
            self.surface.insert_shadow(rest)

    def _check_for_mention(self) -> None:
        if self.on_mention is None:
            return
        scanned = self._scan()
        if not scanned or not scanned.is_mention:
            return
        if self._pending is None:
            logger.debug("mention %r -> %s", scanned.word, SessionState.AWAITING_MENTION.value)
        self._pending = scanned.span
        self.on_mention(MentionRequest(self, scanned.word[1:], scanned.span))

    def _commit_suggestion(self, scanned: ScannedWord) -> None:
        suggestion = self.suggester.suggest(scanned.word)
        if not suggestion:
            return
        self.surface.replace_span(scanned.span, chip_for(TagResource(tag=suggestion)), TextRun(" "))
        logger.debug("tag suggestion committed: %s", suggestion)
        self._emit_update()

    def _emit_change(self) -> None:
        """Submit: serialize, hand to on_submit, clear. Suppressed while a mention is pending."""
        if self.on_submit is None or self._pending is not None:
            return
        document = self.get_value()
        self.on_submit(document)
        self.clear()

    def _emit_update(self) -> None:
        if self.on_change is not None:
            self.on_change(self.get_value())

    def _default_action(self, event: KeyEvent) -> bool:
        key = event.key
        s = self.surface
        if key == "Backspace":
            idx = s.chip_before_caret()
            if idx is not None:
                event.prevent_default()
                chip = s.remove_node(idx)
                logger.debug("removed %s chip atomically", chip.kind)
                return True
            if s.delete_backward():
                self._on_input()
            return False
        if key == "ArrowLeft":
            s.move_left()
        elif key == "ArrowRight":
            s.move_right()
        elif key == "Home":
            s.move_home()
        elif key == "End":
            s.move_end()
        elif len(key) == 1:
            s.insert_text(key)
            self._on_input()
        return False
