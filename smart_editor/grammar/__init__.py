# smart_editor/grammar/__init__.py
"""
Entity grammar package for smart_editor.
Expose the registry, the rule base class and the built-in rules.
"""

from .base import EntityRule
from .registry import EntityGrammar
from .tags import TagRule
from .task_refs import TaskRefRule


def default_grammar() -> EntityGrammar:
    """Grammar with only the built-in ``#word`` tag rule."""
    return EntityGrammar([TagRule()])


__all__ = ["EntityRule", "EntityGrammar", "TagRule", "TaskRefRule", "default_grammar"]
