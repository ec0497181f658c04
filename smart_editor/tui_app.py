# tui_app.py - Smart Editor TUI host
# -------------------------------------------------------
# Terminal host for one EditorSession. The engine owns the surface; this app
# only translates Textual key/paste/focus events into engine calls and draws
# the result.
# Features:
#  - live editing surface with caret, tag pills, link chips and mention chips
#  - shadow tag completion (TAB accepts)
#  - @mention picker over a small directory (up/down, Enter inserts, Esc cancels)
#  - Enter submits; submitted documents are listed with their JSON
# -------------------------------------------------------

from __future__ import annotations

from typing import List, Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from smart_editor.core.colors import tag_color
from smart_editor.core.directory import MentionDirectory
from smart_editor.core.document import Document
from smart_editor.core.session import EditorSession, KeyEvent, MentionRequest, SessionState
from smart_editor.core.surface import Chip, Shadow, Surface, TextRun
from smart_editor.render import MENTION_STYLES, RICH_COLORS, to_rich_text
from smart_editor.utils.config_manager import Config
from smart_editor.utils.logger_utils import Log

DEMO_DIRECTORY = MentionDirectory(
    users={"u1": "Ada Lovelace", "u2": "Alan Turing", "u3": "Grace Hopper"},
    teams={"t1": "Platform", "t2": "Design"},
    tasks={"k1": "Ship editor", "k2": "Write docs"},
)

# Textual key name -> browser key name used by the engine
KEY_MAP = {
    "tab": "Tab",
    "enter": "Enter",
    "backspace": "Backspace",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "home": "Home",
    "end": "End",
    "space": " ",
}

CARET = "▏"


def surface_to_text(surface: Surface, show_caret: bool = True) -> Text:
    """Draw a surface: runs as text, chips styled, shadow dimmed, caret as a bar."""
    out = Text()
    caret = surface.caret
    for i, node in enumerate(surface.nodes):
        if show_caret and caret.node is None and caret.offset == i:
            out.append(CARET, style="bold")
        if isinstance(node, TextRun):
            if show_caret and caret.node == i:
                out.append(node.text[:caret.offset])
                out.append(CARET, style="bold")
                out.append(node.text[caret.offset:])
            else:
                out.append(node.text)
        elif isinstance(node, Chip):
            if node.kind == "tag":
                out.append(f" {node.label} ", style=f"bold white on {RICH_COLORS[tag_color(node.label)]}")
            elif node.kind == "link":
                out.append(node.label, style="underline cyan")
            else:
                out.append(node.label, style=MENTION_STYLES[node.kind])
        elif isinstance(node, Shadow):
            out.append(node.text, style="dim italic")
    if show_caret and caret.node is None and caret.offset == len(surface.nodes):
        out.append(CARET, style="bold")
    return out


class EditorView(Static, can_focus=True):
    """Focusable view of the editing surface; forwards keys and pastes to the session."""

    def on_key(self, event: events.Key) -> None:
        self.app.handle_key(event)

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        self.app.session.paste(event.text)
        self.app.refresh_editor()

    def on_blur(self, event: events.Blur) -> None:
        self.app.handle_blur()


class MentionPicker(Static):
    """Candidate list shown while a mention is pending."""

    def show(self, candidates: List, selected: int) -> None:
        if not candidates:
            self.update("[dim]No matches (Esc to cancel)[/dim]")
            return
        lines = []
        for i, res in enumerate(candidates):
            marker = "›" if i == selected else " "
            lines.append(f"{marker} [b]{res.display}[/b] [dim]{res.type}[/dim]")
        self.update("\n".join(lines))


class SmartEditorTUI(App):
    """
    Host app. Architecture:
     - UI events to EditorSession
     - session callbacks (submit/mention) to app state
     - app state to widget updates
    """
    CSS = """
    #left { width: 3fr; }
    #right { width: 1fr; border-left: solid $accent; }
    #editor { border: round $primary; min-height: 3; padding: 0 1; }
    #submissions { height: 1fr; }
    """

    BINDINGS = [
        ("ctrl+l", "clear_editor", "Clear"),
        ("ctrl+q", "quit", "Quit"),
    ]

    candidates = reactive(list)
    selected = reactive(0)

    def __init__(self, cfg: Optional[Config] = None, directory: Optional[MentionDirectory] = None):
        super().__init__()
        self.cfg = cfg or Config()
        self.directory = directory or DEMO_DIRECTORY
        self.log_file = Log(self.cfg.get("log_path"))
        self.mention: Optional[MentionRequest] = None
        self.app_focused = True
        self.session = EditorSession(
            resolver=self.directory,
            on_submit=self.on_submit_document,
            on_mention=self.on_mention_request,
            available_tags=self.cfg.get("available_tags", []),
            strict_links=bool(self.cfg.get("strict_links", False)),
        )

    # UI --------------------------------------------------------------------
    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            with Container(id="left"):
                yield EditorView(id="editor")
                yield VerticalScroll(id="submissions")
            with Container(id="right"):
                yield Static("[b]Mentions[/b]")
                yield MentionPicker(id="picker")
        yield Footer()

    def on_mount(self) -> None:
        if self.cfg.get("autofocus", True):
            self.query_one(EditorView).focus()
            self.session.focus()
        self.refresh_editor()

    def on_app_blur(self, event: events.AppBlur) -> None:
        self.app_focused = False

    def on_app_focus(self, event: events.AppFocus) -> None:
        self.app_focused = True

    # engine wiring ----------------------------------------------------------
    def handle_key(self, event: events.Key) -> None:
        if event.key.startswith("ctrl+"):
            return  # app bindings
        event.stop()
        event.prevent_default()
        if self.session.state is SessionState.AWAITING_MENTION and self._picker_key(event.key):
            self.refresh_editor()
            return
        if event.key in KEY_MAP:
            self.session.key_down(KeyEvent(KEY_MAP[event.key]))
        elif event.key == "shift+enter":
            self.session.key_down(KeyEvent("Enter", shift=True))
        elif event.is_printable and event.character:
            self.session.key_down(KeyEvent(event.character))
        self._sync_picker()
        self.refresh_editor()

    def _picker_key(self, key: str) -> bool:
        """Keys owned by the mention picker while a mention is pending."""
        if key == "up":
            self.selected = max(0, self.selected - 1)
            return True
        if key == "down":
            self.selected = min(max(len(self.candidates) - 1, 0), self.selected + 1)
            return True
        if key == "escape":
            self.session.cancel_mention()
            self.candidates = []
            return True
        if key in ("enter", "tab") and self.candidates:
            self.session.insert_mention(self.candidates[self.selected])
            self.log_file.info(f"mention inserted: {self.candidates[self.selected].key}")
            self.candidates = []
            return True
        return False

    def _sync_picker(self) -> None:
        if self.session.state is SessionState.IDLE and self.candidates:
            self.candidates = []

    def handle_blur(self) -> None:
        self.session.blur(app_has_focus=self.app_focused)
        self.refresh_editor()

    def on_mention_request(self, request: MentionRequest) -> None:
        self.mention = request
        self.candidates = self.directory.search(request.query)
        self.selected = 0

    def on_submit_document(self, doc: Document) -> None:
        if doc.is_empty:
            return
        self.log_file.info(f"submitted: {doc.to_json()}")
        panel = Static(to_rich_text(doc, self.directory))
        self.query_one("#submissions", VerticalScroll).mount(panel)
        self.query_one("#submissions", VerticalScroll).mount(Static(Text(doc.to_json(), style="dim")))

    # reactive watchers -------------------------------------------------------
    def watch_candidates(self, candidates) -> None:
        if self.is_mounted:
            self.query_one(MentionPicker).show(candidates, self.selected)

    def watch_selected(self, selected) -> None:
        if self.is_mounted:
            self.query_one(MentionPicker).show(self.candidates, selected)

    # actions ----------------------------------------------------------------
    def action_clear_editor(self) -> None:
        self.session.clear()
        self.candidates = []
        self.refresh_editor()

    def refresh_editor(self) -> None:
        view = self.query_one(EditorView)
        surface = self.session.surface
        if not surface.nodes and not view.has_focus:
            view.update(Text(self.cfg.get("placeholder", ""), style="dim"))
        else:
            view.update(surface_to_text(surface, show_caret=view.has_focus))


def run() -> None:
    SmartEditorTUI().run()


if __name__ == "__main__":
    run()
