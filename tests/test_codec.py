# tests/test_codec.py - Document <-> Surface
from smart_editor.core.codec import from_surface, label_for, to_surface
from smart_editor.core.document import (
    Document,
    LinkResource,
    TagResource,
    TaskResource,
    TeamResource,
    UserResource,
)
from smart_editor.core.surface import Chip, Position, Shadow, Surface, TextRun

LABELS = {("user", "u1"): "Ada", ("task", "k1"): "Ship it"}


def resolve(kind, entity_id):
    return LABELS.get((kind, entity_id))


def test_to_surface_builds_chips_and_resolves_labels():
    doc = Document(
        text="ping [[0]] about [[1]]",
        resources=[TagResource(tag="ops"), UserResource(user_id="u1")],
    )
    s = to_surface(doc, resolve)
    assert [type(n) for n in s.nodes] == [TextRun, Chip, TextRun, Chip]
    assert s.text_content() == "ping ops about Ada"
    assert s.nodes[1].css_class.startswith("tag-pill tag-pill-")
    assert s.nodes[3].css_class == "mention-person"
    # caret at the end, after the last chip
    assert s.caret == Position.container(4)


def test_stored_labels_are_not_trusted_when_a_resolver_is_given():
    user = UserResource(user_id="u1", display="Old name")
    assert label_for(user, resolve) == "Ada"
    assert label_for(user) == "Old name"


def test_unknown_entities_degrade():
    assert label_for(UserResource(user_id="nobody"), resolve) == "Unknown User"
    assert label_for(TeamResource(team_id="t1")) == "Unknown Team"

    def broken(kind, entity_id):
        raise RuntimeError("directory down")

    assert label_for(TaskResource(task_id="k1"), broken) == "Unknown Task"


def test_out_of_range_token_stays_text():
    s = to_surface(Document(text="a [[5]] b"))
    assert s.nodes == [TextRun("a [[5]] b")]


def test_from_surface_numbers_chips_by_type_pass():
    s = Surface([
        Chip(UserResource(user_id="u1"), "Ada"),
        TextRun(" "),
        Chip(TagResource(tag="ops"), "ops"),
        TextRun(" "),
        Chip(LinkResource(url="https://a.io", display="a.io"), "a.io"),
    ])
    doc = from_surface(s)
    assert [r.type for r in doc.resources] == ["tag", "link", "user"]
    assert doc.text == "[[2]] [[0]] [[1]]"
    assert doc.problems() == []


def test_mentions_are_persisted_id_only():
    s = Surface([Chip(TaskResource(task_id="k1", display="Ship it"), "Ship it")])
    doc = from_surface(s)
    assert doc.to_dict() == {"text": "[[0]]", "resources": [{"type": "task", "taskId": "k1"}]}


def test_text_is_cleaned():
    s = Surface([TextRun("a b&nbsp;c <b>d</b>"), Shadow("zz"), TextRun(" see [[0]]")])
    doc = from_surface(s)
    assert doc.text == "a b c d see [0]"
    assert doc.resources == []


def test_round_trip_in_pass_order():
    doc = Document(
        text="[[0]] fix [[1]] for [[2]]",
        resources=[
            TagResource(tag="bug"),
            LinkResource(url="https://example.com/x", display="example.com"),
            UserResource(user_id="u1"),
        ],
    )
    assert from_surface(to_surface(doc, resolve)) == doc


def test_duplicate_tokens_render_twice():
    doc = Document(text="[[0]] and [[0]]", resources=[TagResource(tag="x")])
    assert len(to_surface(doc).chips()) == 2


def test_angle_brackets_are_plain_text():
    doc = Document(text="press <Enter> to send, a<b and c>d")
    assert from_surface(to_surface(doc)) == doc
