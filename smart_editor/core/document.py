# smart_editor/core/document.py
"""
Document model - the persisted form of a piece of rich text.

A Document is plain text with placeholder tokens ``[[i]]`` plus an ordered list
of typed resources; token ``[[i]]`` dereferences ``resources[i]``.

Persisted JSON shape (kept byte-compatible with stored todos/messages):
    {"text": "ship [[0]] with [[1]]",
     "resources": [{"type": "tag", "tag": "release"},
                   {"type": "user", "userId": "u_42"}]}

Resources are a closed union discriminated by ``type``. Python attributes are
snake_case, the wire names are camelCase (``user_id`` <-> ``userId``).
"""

from __future__ import annotations

import json
import re
from abc import abstractmethod
from collections import Counter
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from typing_extensions import Annotated

from smart_editor.core.errors import DocumentError

PLACEHOLDER_RE = re.compile(r"\[\[(\d+)\]\]")

ResourceKind = Literal["tag", "link", "user", "team", "task"]
MentionKind = Literal["user", "team", "task"]


def placeholder(index: int) -> str:
    """Token text for resources[index]."""
    return f"[[{index}]]"


# Resources -------------------------------------------------------------------

class _ResourceBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    @abstractmethod
    def key(self) -> str:
        """Identifying value of the resource (tag text, url or entity id)."""


class TagResource(_ResourceBase):
    type: Literal["tag"] = "tag"
    tag: str

    @property
    def key(self) -> str:
        return self.tag


class LinkResource(_ResourceBase):
    type: Literal["link"] = "link"
    url: str
    display: str

    @property
    def key(self) -> str:
        return self.url


class UserResource(_ResourceBase):
    type: Literal["user"] = "user"
    user_id: str = Field(alias="userId")
    display: Optional[str] = None

    @property
    def key(self) -> str:
        return self.user_id


class TeamResource(_ResourceBase):
    type: Literal["team"] = "team"
    team_id: str = Field(alias="teamId")
    display: Optional[str] = None

    @property
    def key(self) -> str:
        return self.team_id


class TaskResource(_ResourceBase):
    type: Literal["task"] = "task"
    task_id: str = Field(alias="taskId")
    display: Optional[str] = None

    @property
    def key(self) -> str:
        return self.task_id


Resource = Annotated[
    Union[TagResource, LinkResource, UserResource, TeamResource, TaskResource],
    Field(discriminator="type"),
]
MentionResource = Union[UserResource, TeamResource, TaskResource]

MENTION_TYPES = (UserResource, TeamResource, TaskResource)


def is_mention(resource: Any) -> bool:
    return isinstance(resource, MENTION_TYPES)


def id_only(resource: Any) -> Any:
    """Drop the cached display label of a mention; labels are re-resolved on render."""
    if is_mention(resource) and resource.display is not None:
        return resource.model_copy(update={"display": None})
    return resource


# Document --------------------------------------------------------------------

class Document(BaseModel):
    """
    Structured rich text: ``text`` with ``[[i]]`` tokens + ``resources``.

    Construction is lenient (rendering is total and tolerates bad tokens);
    use ``ensure_valid()`` or ``from_dict(..., strict=True)`` at trust boundaries.
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    resources: List[Resource] = Field(default_factory=list)

    # constructors -----------------------------------------------------
    @classmethod
    def empty(cls) -> "Document":
        return cls(text="", resources=[])

    @classmethod
    def from_dict(cls, data: Dict[str, Any], strict: bool = False) -> "Document":
        try:
            doc = cls.model_validate(data)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise DocumentError("invalid document", problems) from e
        if strict:
            doc.ensure_valid()
        return doc

    @classmethod
    def from_json(cls, raw: Union[str, bytes], strict: bool = False) -> "Document":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DocumentError(f"document is not valid JSON ({e.msg})") from e
        if not isinstance(data, dict):
            raise DocumentError("document must be a JSON object")
        return cls.from_dict(data, strict=strict)

    # serialization ----------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # invariants -------------------------------------------------------
    def placeholder_indices(self) -> List[int]:
        """Indices of all placeholder tokens in reading order."""
        return [int(m.group(1)) for m in PLACEHOLDER_RE.finditer(self.text)]

    def problems(self) -> List[str]:
        """
        List invariant violations:
         - a token pointing past the end of resources
         - a resource referenced zero or several times
        """
        out: List[str] = []
        refs = Counter(self.placeholder_indices())
        for idx in sorted(refs):
            if idx >= len(self.resources):
                out.append(f"placeholder {placeholder(idx)} has no resource")
        for idx in range(len(self.resources)):
            n = refs.get(idx, 0)
            if n != 1:
                out.append(f"resource {idx} referenced {n} times")
        return out

    def ensure_valid(self) -> "Document":
        problems = self.problems()
        if problems:
            raise DocumentError("document violates placeholder contract", problems)
        return self

    # queries ----------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        """Blank text and no resources; all such documents count as the same empty state."""
        return not self.text.strip() and not self.resources

    def resource_ids(self, kind: ResourceKind) -> List[str]:
        """Keys of every resource of ``kind`` in resource order (e.g. task ids)."""
        return [r.key for r in self.resources if r.type == kind]


_RESOURCE_ADAPTER: TypeAdapter = TypeAdapter(Resource)


def coerce_resource(value: Any) -> Any:
    """Accept a Resource instance or its persisted dict form."""
    if isinstance(value, _ResourceBase):
        return value
    try:
        return _RESOURCE_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise DocumentError("invalid resource", [err["msg"] for err in e.errors()]) from e
