# smart_editor/text/normalizer.py
import re

from smart_editor.core.document import PLACEHOLDER_RE

_nbsp_re = re.compile("\u00a0|&nbsp;")


def normalize_spaces(s: str) -> str:
    """Non-breaking space artifacts (raw or entity) become plain spaces."""
    if not s:
        return ""
    return _nbsp_re.sub(" ", s)


def neutralize_placeholders(s: str) -> str:
    """
    Typed text must never look like a placeholder token.
    ``[[3]]`` in user text is rewritten to ``[3]``.
    """
    if not s:
        return ""
    return PLACEHOLDER_RE.sub(lambda m: f"[{m.group(1)}]", s)


def normalize_run(s: str) -> str:
    """
    Clean one text run before it goes into a persisted document.
    Runs hold plain text only, so ``<`` and ``>`` are kept as typed.
    """
    return neutralize_placeholders(normalize_spaces(s))
