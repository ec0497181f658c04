# smart_editor/core/errors.py
"""
Exception types raised by the editor core.

Only two things are ever fatal to a call:
 - loading a persisted document that breaks the placeholder/resource contract
 - driving the mention protocol out of order (host and engine disagree)
Unresolvable entity ids and odd paste content are degraded, never raised.
"""

from __future__ import annotations

from typing import List, Optional


class SmartEditorError(Exception):
    """Base class for every error raised by smart_editor."""


class DocumentError(SmartEditorError, ValueError):
    """A persisted document is malformed or violates its invariants."""

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        self.problems: List[str] = list(problems or [])
        if self.problems:
            message = f"{message}: " + "; ".join(self.problems)
        super().__init__(message)


class MentionStateError(SmartEditorError, RuntimeError):
    """insert_mention() was called while no mention range is pending."""
