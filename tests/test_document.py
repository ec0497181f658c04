# tests/test_document.py
import pytest

from smart_editor.core.document import (
    Document,
    LinkResource,
    TagResource,
    TaskResource,
    UserResource,
    coerce_resource,
    placeholder,
)
from smart_editor.core.errors import DocumentError


def test_wire_names_are_camel_case():
    raw = {
        "text": "ask [[0]] about [[1]]",
        "resources": [
            {"type": "user", "userId": "u1"},
            {"type": "task", "taskId": "k9"},
        ],
    }
    doc = Document.from_dict(raw)
    assert isinstance(doc.resources[0], UserResource)
    assert doc.resources[0].user_id == "u1"
    assert doc.resources[1].task_id == "k9"
    # display is optional and omitted when unset
    assert doc.to_dict() == raw


def test_json_round_trip_keeps_order():
    doc = Document(
        text="[[0]] see [[1]]",
        resources=[TagResource(tag="ops"), LinkResource(url="https://a.io", display="a.io")],
    )
    again = Document.from_json(doc.to_json())
    assert again == doc


def test_unknown_resource_type_is_rejected():
    with pytest.raises(DocumentError) as e:
        Document.from_dict({"text": "[[0]]", "resources": [{"type": "emoji", "name": "x"}]})
    assert e.value.problems


def test_missing_id_is_rejected():
    with pytest.raises(DocumentError):
        Document.from_dict({"text": "[[0]]", "resources": [{"type": "team"}]})


def test_from_json_requires_an_object():
    with pytest.raises(DocumentError):
        Document.from_json("not json")
    with pytest.raises(DocumentError):
        Document.from_json("[]")


def test_problems_and_strict_loading():
    raw = {"text": "a [[1]] b", "resources": [{"type": "tag", "tag": "x"}]}
    doc = Document.from_dict(raw)  # lenient by default
    problems = doc.problems()
    assert "placeholder [[1]] has no resource" in problems
    assert "resource 0 referenced 0 times" in problems

    with pytest.raises(DocumentError) as e:
        Document.from_dict(raw, strict=True)
    assert e.value.problems == problems


def test_duplicate_reference_is_a_problem():
    doc = Document(text="[[0]][[0]]", resources=[TagResource(tag="x")])
    assert doc.problems() == ["resource 0 referenced 2 times"]
    assert Document(text="[[0]]", resources=[TagResource(tag="x")]).ensure_valid()


def test_empty_states_are_equivalent():
    assert Document.empty().is_empty
    assert Document(text="   \n ").is_empty
    assert not Document(text="", resources=[TagResource(tag="x")]).is_empty
    assert not Document(text="hi").is_empty


def test_resource_ids_by_kind():
    doc = Document(
        text="[[0]] [[1]] [[2]]",
        resources=[TagResource(tag="a"), TaskResource(task_id="k1"), TaskResource(task_id="k2")],
    )
    assert doc.resource_ids("task") == ["k1", "k2"]
    assert doc.resource_ids("user") == []


def test_coerce_resource_accepts_dicts_and_models():
    user = UserResource(user_id="u1", display="Ada")
    assert coerce_resource(user) is user
    assert coerce_resource({"type": "user", "userId": "u1", "display": "Ada"}) == user
    with pytest.raises(DocumentError):
        coerce_resource({"type": "user"})


def test_placeholder_token():
    assert placeholder(12) == "[[12]]"


def test_resource_base_is_abstract():
    from smart_editor.core.document import _ResourceBase

    with pytest.raises(TypeError):
        _ResourceBase()
