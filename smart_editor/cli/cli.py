"""
cli.py - command line front-end for the smart editor engine
Features:
- render stored documents (tag pills, links, resolved mentions) with Rich
- ask the tag suggester what it would propose for a partial #tag
- replay a keystroke script through a real EditorSession and show every submission
- show the deterministic colour of a tag
"""

import argparse
import json
import re
import sys
from typing import List, Optional

# ui styling with Rich
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from smart_editor.core.directory import MentionDirectory
from smart_editor.core.document import Document
from smart_editor.core.errors import SmartEditorError
from smart_editor.core.colors import tag_color
from smart_editor.core.session import EditorSession, KeyEvent, MentionRequest
from smart_editor.core.suggestions import TagSuggester
from smart_editor.render import RICH_COLORS, to_plain_text, to_rich_text
from smart_editor.utils.config_manager import Config
from smart_editor.utils.logger_utils import Log, setup_logging

# initialise console for rich output
console = Console()

# <key> tokens understood by `replay`
SPECIAL_KEYS = {
    "tab": ("Tab", False),
    "enter": ("Enter", False),
    "shift+enter": ("Enter", True),
    "space": (" ", False),
    "bs": ("Backspace", False),
    "backspace": ("Backspace", False),
    "left": ("ArrowLeft", False),
    "right": ("ArrowRight", False),
    "home": ("Home", False),
    "end": ("End", False),
    "esc": ("Escape", False),
}
TOKEN_RE = re.compile(r"<([^<>]+)>")


class CLI:
    """Command-line interface wrapping the engine for inspection and scripted sessions."""

    def __init__(self, cfg: Config, directory: Optional[MentionDirectory] = None, log: Optional[Log] = None):
        self.cfg = cfg
        self.directory = directory or MentionDirectory()
        self.log = log or Log(cfg.get("log_path"))
        self.submissions: List[Document] = []
        self._mention: Optional[MentionRequest] = None

    # RENDER ---------------------------------------------------------------
    def render(self, path: str) -> int:
        with open(path, "r", encoding="utf8") as f:
            doc = Document.from_json(f.read())
        with self.log.time_block("render"):
            rich_text = to_rich_text(doc, self.directory)
        console.print(Panel(rich_text, title=path, border_style="cyan"))
        console.print(f"[dim]plain:[/dim] {to_plain_text(doc, self.directory)}")
        problems = doc.problems()
        for p in problems:
            console.print(f"[yellow]warning:[/yellow] {p}")
        return 1 if problems else 0

    # SUGGEST -------------------------------------------------------------
    def suggest(self, partial: str, tags: List[str]) -> int:
        if not partial.startswith("#"):
            partial = f"#{partial}"
        sugg = TagSuggester(tags)
        ranked = sugg.candidates(partial)
        if not ranked:
            console.print("[dim](no suggestions)[/dim]")
            return 1
        table = Table(title=f"Suggestions for {partial}", box=box.SIMPLE, show_edge=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Tag", style="bold")
        table.add_column("Count", justify="right", style="magenta")
        for i, (tag, count) in enumerate(ranked, 1):
            table.add_row(str(i), Text(tag, style=RICH_COLORS[tag_color(tag)]), str(count))
        console.print(table)
        return 0

    # COLOR ---------------------------------------------------------------
    def color(self, tag: str) -> int:
        name = tag_color(tag)
        console.print(Text(f" {tag} ", style=f"bold white on {RICH_COLORS[name]}"), name)
        return 0

    # REPLAY --------------------------------------------------------------
    def replay(self, script: str, tags: List[str]) -> int:
        """
        Feed a keystroke script into a session. Plain characters are typed,
        <tab> <enter> <shift+enter> <space> <bs> <left> <right> <home> <end> are keys,
        <paste:TEXT> pastes, <blur> blurs, <pick> inserts the first directory match
        for the pending @query, <mention:KIND:ID> inserts a specific entity,
        <cancel> cancels the pending mention.
        """
        session = EditorSession(
            resolver=self.directory,
            on_submit=self._on_submit,
            on_mention=self._on_mention,
            available_tags=tags,
            strict_links=bool(self.cfg.get("strict_links", False)),
            autofocus=True,
        )
        with self.log.time_block("replay"):
            for line in script.splitlines():
                self._feed(session, line)

        for i, doc in enumerate(self.submissions, 1):
            console.print(Panel(to_rich_text(doc, self.directory), title=f"submit {i}", border_style="green"))
            console.print_json(doc.to_json())
        rest = session.get_value()
        if not rest.is_empty:
            console.print(Panel(to_rich_text(rest, self.directory), title="unsubmitted", border_style="yellow"))
        return 0

    def _feed(self, session: EditorSession, line: str) -> None:
        pos = 0
        for m in TOKEN_RE.finditer(line):
            self._type(session, line[pos:m.start()])
            self._token(session, m.group(1))
            pos = m.end()
        self._type(session, line[pos:])

    def _type(self, session: EditorSession, chunk: str) -> None:
        for ch in chunk:
            session.key_down(KeyEvent(ch))

    def _token(self, session: EditorSession, token: str) -> None:
        low = token.lower()
        if low in SPECIAL_KEYS:
            key, shift = SPECIAL_KEYS[low]
            session.key_down(KeyEvent(key, shift=shift))
        elif low.startswith("paste:"):
            session.paste(token[len("paste:"):])
        elif low == "blur":
            session.blur()
        elif low == "cancel":
            session.cancel_mention()
        elif low == "pick":
            query = self._mention.query if self._mention else ""
            hits = self.directory.search(query, limit=1)
            if hits:
                session.insert_mention(hits[0])
            else:
                session.cancel_mention()
        elif low.startswith("mention:"):
            _, kind, key = token.split(":", 2)
            label = self.directory(kind, key)
            id_field = {"user": "userId", "team": "teamId", "task": "taskId"}[kind]
            session.insert_mention({"type": kind, id_field: key, "display": label})
        else:
            session.type_text(f"<{token}>")

    def _on_submit(self, doc: Document) -> None:
        self.submissions.append(doc)
        self.log.info(f"submitted: {doc.to_json()}")

    def _on_mention(self, request: MentionRequest) -> None:
        self._mention = request


# ENTRY POINT ------------------------------------------------------------------
def _read_tags(args) -> List[str]:
    tags: List[str] = []
    if getattr(args, "tags", None):
        tags.extend(t.strip() for t in args.tags.split(",") if t.strip())
    if getattr(args, "tags_file", None):
        with open(args.tags_file, "r", encoding="utf8") as f:
            tags.extend(line.strip() for line in f if line.strip())
    return tags


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="smart-editor", description="Rich-text entity editor tools")
    p.add_argument("--config", default="smart_editor.json", help="config file (created if missing)")
    p.add_argument("--directory", help="JSON file with {users:{id:name}, teams:{...}, tasks:{...}}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="render a stored document")
    r.add_argument("file")

    s = sub.add_parser("suggest", help="rank tag suggestions for a partial #tag")
    s.add_argument("partial")
    s.add_argument("--tags", help="comma separated tag corpus")
    s.add_argument("--tags-file", help="one tag per line")

    rp = sub.add_parser("replay", help="replay a keystroke script through an editing session")
    rp.add_argument("script")
    rp.add_argument("--tags", help="comma separated tag corpus")
    rp.add_argument("--tags-file", help="one tag per line")

    c = sub.add_parser("color", help="show the colour assigned to a tag")
    c.add_argument("tag")

    sub.add_parser("config", help="show the current config")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    setup_logging(args.verbose, cfg.get("log_path"))

    directory = None
    if args.directory:
        with open(args.directory, "r", encoding="utf8") as f:
            directory = MentionDirectory.from_dict(json.load(f))
    cli = CLI(cfg, directory)

    try:
        if args.cmd == "render":
            return cli.render(args.file)
        if args.cmd == "suggest":
            return cli.suggest(args.partial, _read_tags(args) or cfg.get("available_tags", []))
        if args.cmd == "replay":
            with open(args.script, "r", encoding="utf8") as f:
                script = f.read()
            return cli.replay(script, _read_tags(args) or cfg.get("available_tags", []))
        if args.cmd == "color":
            return cli.color(args.tag)
        if args.cmd == "config":
            cfg.show(console)
            return 0
    except (OSError, SmartEditorError) as e:
        console.print(f"[red]error:[/red] {e}")
        return 2
    return 1


if __name__ == "__main__":
    sys.exit(main())
