# smart_editor/core/protocols.py
"""
Protocol interfaces between the editor engine and its host.

The engine never looks entities up itself and never renders a picker: it asks
the host for labels (EntityResolver) and hands the host a MentionApi when the
user starts an @mention. Hosts implement these with whatever data layer and UI
they have; tests use plain functions and MagicMock.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from smart_editor.core.document import Document


@runtime_checkable
class EntityResolver(Protocol):
    """resolve(kind, id) -> current human label, or None when unknown."""

    def __call__(self, kind: str, entity_id: str) -> Optional[str]:
        ...


@runtime_checkable
class MentionApi(Protocol):
    """
    Handed to the host's on_mention callback, bound to the pending @range.
    Exactly one of these ends the pending mention.
    """

    def insert_mention(self, entity: Any) -> None:
        ...

    def cancel_mention(self) -> None:
        ...


class KeyEventProtocol(Protocol):
    key: str
    shift: bool
    default_prevented: bool

    def prevent_default(self) -> None:
        ...


# host callbacks
SubmitHandler = Callable[[Document], None]
ChangeHandler = Callable[[Document], None]
BlurHandler = Callable[[], None]
MentionHandler = Callable[[MentionApi], None]
KeyDownHandler = Callable[[KeyEventProtocol], None]
