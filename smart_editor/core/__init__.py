"""
smart_editor.core

The editing engine behind the smart editor.
Contains:
 - the persisted document model (text with [[i]] tokens + typed resources)
 - the in-memory editing surface and its caret primitives
 - the surface codec (document <-> surface)
 - the cursor-relative word scanner and the #tag suggester
 - the editing session state machine exposed to hosts
"""

from .errors import SmartEditorError, DocumentError, MentionStateError
from .document import (
    Document,
    Resource,
    TagResource,
    LinkResource,
    UserResource,
    TeamResource,
    TaskResource,
    PLACEHOLDER_RE,
    placeholder,
)
from .colors import tag_color, tag_class
from .surface import Surface, TextRun, Chip, Shadow, Position, Span
from .codec import to_surface, from_surface, chip_for, label_for
from .scanner import ScannedWord, word_before_cursor
from .suggestions import TagSuggester
from .directory import MentionDirectory
from .session import EditorSession, KeyEvent, MentionRequest, SessionState

__all__ = [
    "SmartEditorError",
    "DocumentError",
    "MentionStateError",
    "Document",
    "Resource",
    "TagResource",
    "LinkResource",
    "UserResource",
    "TeamResource",
    "TaskResource",
    "PLACEHOLDER_RE",
    "placeholder",
    "tag_color",
    "tag_class",
    "Surface",
    "TextRun",
    "Chip",
    "Shadow",
    "Position",
    "Span",
    "to_surface",
    "from_surface",
    "chip_for",
    "label_for",
    "ScannedWord",
    "word_before_cursor",
    "TagSuggester",
    "MentionDirectory",
    "EditorSession",
    "KeyEvent",
    "MentionRequest",
    "SessionState",
]
