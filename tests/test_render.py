# tests/test_render.py
from smart_editor.core.directory import MentionDirectory
from smart_editor.core.document import Document, LinkResource, TagResource, UserResource
from smart_editor.render import segments, to_plain_text, to_rich_text


def make_doc():
    return Document(
        text="ship [[0]] with [[1]] see [[2]]",
        resources=[
            TagResource(tag="release"),
            UserResource(user_id="u1"),
            LinkResource(url="https://example.com/x", display="example.com"),
        ],
    )


def test_segments():
    segs = segments(make_doc(), MentionDirectory(users={"u1": "Ada"}))
    assert [s.kind for s in segs] == ["text", "tag", "text", "user", "text", "link"]
    assert segs[3].text == "Ada"
    assert segs[3].css_class == "mention-person"
    assert segs[5].target == "https://example.com/x"


def test_plain_text():
    directory = MentionDirectory(users={"u1": "Ada"})
    assert to_plain_text(make_doc(), directory) == "ship #release with @Ada see example.com"
    assert to_plain_text(make_doc(), MentionDirectory()) == "ship #release with @Unknown User see example.com"


def test_rich_text_spans():
    text = to_rich_text(make_doc(), MentionDirectory(users={"u1": "Ada"}))
    assert text.plain == "ship  release  with Ada see example.com"
    assert len(text.spans) == 3


def test_bad_tokens_render_as_text():
    doc = Document(text="a [[3]] b [[0]]", resources=[TagResource(tag="x")])
    assert to_plain_text(doc) == "a [[3]] b #x"
