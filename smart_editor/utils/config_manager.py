# config_manager.py - JSON config manager for editor hosts (CLI/TUI)

import json
import logging
import os

from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)

DEFAULTS = {
    "placeholder": "Write a todo… (#tag, @mention, paste a link)",
    "autofocus": True,
    "strict_links": False,  # True: bare words like "hello" are not links
    "available_tags": [],
    "log_path": os.path.join("logs", "smart_editor.log"),
}


class Config:
    def __init__(self, path="smart_editor.json"):
        self.path = path
        self.data = json.loads(json.dumps(DEFAULTS))
        self._load()

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    self.data.update(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning("config %s unreadable, using defaults: %s", self.path, e)
        else:
            self.save()

    def save(self):
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2, ensure_ascii=False)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def show(self, console=None):
        table = Table(title="Config")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for k, v in self.data.items():
            table.add_row(k, repr(v))
        (console or Console()).print(table)

    def set(self, key, val):
        """Set an option, coercing ``val`` to the default's type. Unknown keys raise KeyError."""
        if key not in DEFAULTS:
            raise KeyError(f"No such option: {key}")
        kind = type(DEFAULTS[key])
        if kind is bool and isinstance(val, str):
            val = val.strip().lower() in ("1", "true", "yes", "on")
        elif kind is list and isinstance(val, str):
            val = [v for v in (p.strip() for p in val.split(",")) if v]
        else:
            val = kind(val)
        self.data[key] = val
        self.save()
