"""
Entity grammar: holds conversion rules and evaluates them safely and deterministically.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from smart_editor.core.document import Resource
from smart_editor.grammar.base import EntityRule

logger = logging.getLogger(__name__)


class RuleEntry:
    """Wrapper tracking rule instance, registration order and enable/disable state."""

    def __init__(self, inst: EntityRule, seq: int):
        self.inst = inst
        self.seq = seq
        self.enabled = True

    def __repr__(self):
        return f"<RuleEntry {self.inst.name} priority={self.inst.priority} enabled={self.enabled}>"


class EntityGrammar:
    """
    Ordered set of EntityRules.
    convert() asks enabled rules by descending priority (registration order on
    ties); the first non-None answer wins. A rule that raises is logged and skipped.
    """

    def __init__(self, rules: Optional[List[EntityRule]] = None):
        self._rules: Dict[str, RuleEntry] = {}
        self._seq = 0
        for r in rules or []:
            self.register(r)

    # Registration -------------------------------------------------------
    def register(self, rule: EntityRule) -> None:
        name = getattr(rule, "name", rule.__class__.__name__)
        self._rules[name] = RuleEntry(rule, self._seq)
        self._seq += 1
        logger.debug("[EntityGrammar] registered: %s", name)

    def unregister(self, name: str) -> None:
        if self._rules.pop(name, None) is not None:
            logger.debug("[EntityGrammar] unregistered: %s", name)

    def names(self) -> List[str]:
        return [e.inst.name for e in self._ordered()]

    def get(self, name: str) -> Optional[EntityRule]:
        entry = self._rules.get(name)
        return entry.inst if entry else None

    def all(self) -> List[RuleEntry]:
        return self._ordered()

    def _ordered(self) -> List[RuleEntry]:
        return sorted(self._rules.values(), key=lambda e: (-e.inst.priority, e.seq))

    # Conversion ---------------------------------------------------------
    def convert(self, word: str) -> Optional[Resource]:
        for entry in self._ordered():
            if not entry.enabled:
                continue
            try:
                res = entry.inst.match(word)
            except Exception as e:
                logger.warning("[Rule:%s] match error: %s", entry.inst.name, e)
                continue
            if res is not None:
                return res
        return None

    # Config -------------------------------------------------------------
    def apply_config(self, cfg: Dict[str, Any]) -> None:
        for name, sub in cfg.items():
            entry = self._rules.get(name)
            if not entry:
                logger.info("[EntityGrammar] config: unknown rule %s", name)
                continue
            entry.enabled = bool(sub.get("enabled", entry.enabled))
            entry.inst.configure(sub)
