"""
smart_editor - rich-text entity editor engine.

Free text interleaved with atomic entities (tags, links, @mentions of users,
teams and tasks), persisted as ``{"text": "... [[0]] ...", "resources": [...]}``.
"""

from smart_editor.core import (
    Document,
    TagResource,
    LinkResource,
    UserResource,
    TeamResource,
    TaskResource,
    DocumentError,
    MentionStateError,
    EditorSession,
    KeyEvent,
    SessionState,
    MentionDirectory,
    to_surface,
    from_surface,
    tag_color,
)

__all__ = [
    "Document",
    "TagResource",
    "LinkResource",
    "UserResource",
    "TeamResource",
    "TaskResource",
    "DocumentError",
    "MentionStateError",
    "EditorSession",
    "KeyEvent",
    "SessionState",
    "MentionDirectory",
    "to_surface",
    "from_surface",
    "tag_color",
]

__version__ = "0.1.0"
