
"""
EntityRule
Minimal base class for word -> entity conversion rules.
 - Small API surface: match() is the only required hook
 - Side effect free: rules run on every Space/Enter keystroke

A rule looks at the word the scanner found before the caret ("#urgent",
"#123", ...) and either returns the Resource that word should become or None.

Return conventions for match():
    - None = not mine, let the next rule look at it
    - Resource = replace the word with a chip for this resource
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from smart_editor.core.document import Resource


class EntityRule:
    """
    Base class for all conversion rules.
    Subclass and override match().
    Attributes:
        name: short identifier for the rule ("tag", "task_ref", etc.)
        priority: higher runs first; built-in tag rule is 0
        cfg: runtime configuration passed from EntityGrammar.apply_config()
    """
    name: str = "rule_base"
    priority: int = 0

    def __init__(self, cfg: Optional[Dict[str, Any]] = None):
        self.cfg: Dict[str, Any] = cfg or {}

    def match(self, word: str) -> Optional[Resource]:
        """
        Args:
            word: the scanned word before the caret, prefix included (e.g. "#urgent")
        Returns:
            None to pass, or the Resource the word converts to.
        """
        return None

    def configure(self, cfg: Dict[str, Any]) -> None:
        """Called when EntityGrammar.apply_config() passes new runtime options."""
        self.cfg.update(cfg)
