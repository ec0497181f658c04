# smart_editor/core/directory.py
# In-memory mention directory: label lookups for the codec plus a tiny
# prefix search for hosts that render their own mention picker.

from __future__ import annotations

from typing import Dict, List, Optional

from smart_editor.core.document import TaskResource, TeamResource, UserResource

_FACTORIES = {
    "user": lambda key, label: UserResource(user_id=key, display=label),
    "team": lambda key, label: TeamResource(team_id=key, display=label),
    "task": lambda key, label: TaskResource(task_id=key, display=label),
}


class MentionDirectory:
    """
    Known users, teams and tasks keyed by id.
    Instances are callable as an EntityResolver: directory("user", "u1") -> "Ada".
    """

    def __init__(self,
                 users: Optional[Dict[str, str]] = None,
                 teams: Optional[Dict[str, str]] = None,
                 tasks: Optional[Dict[str, str]] = None):
        self._labels: Dict[str, Dict[str, str]] = {
            "user": dict(users or {}),
            "team": dict(teams or {}),
            "task": dict(tasks or {}),
        }

    def __call__(self, kind: str, entity_id: str) -> Optional[str]:
        return self._labels.get(kind, {}).get(entity_id)

    def add(self, kind: str, entity_id: str, label: str) -> None:
        self._labels[kind][entity_id] = label

    def remove(self, kind: str, entity_id: str) -> None:
        self._labels[kind].pop(entity_id, None)

    def search(self, query: str, limit: int = 8) -> List:
        """Mention resources whose label starts with (or contains a word starting with) ``query``."""
        q = query.lower()
        hits = []
        for kind, labels in self._labels.items():
            for key, label in labels.items():
                low = label.lower()
                if not q or low.startswith(q) or any(w.startswith(q) for w in low.split()):
                    hits.append((not low.startswith(q), low, kind, key, label))
        hits.sort()
        return [_FACTORIES[kind](key, label) for _, _, kind, key, label in hits[:limit]]

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, str]]) -> "MentionDirectory":
        return cls(users=data.get("users"), teams=data.get("teams"), tasks=data.get("tasks"))
