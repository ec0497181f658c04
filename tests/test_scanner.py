# tests/test_scanner.py
from smart_editor.core.codec import chip_for
from smart_editor.core.document import TagResource
from smart_editor.core.scanner import word_before_cursor
from smart_editor.core.surface import Position, Span, Surface, TextRun


def scan(text, offset=None):
    s = Surface([TextRun(text)], Position(0, len(text) if offset is None else offset))
    return word_before_cursor(s)


def test_trailing_tag_with_span():
    w = scan("hello #wor")
    assert w.word == "#wor"
    assert w.span == Span(0, 6, 10)
    assert w.is_tag and not w.is_mention


def test_mention_and_plain_words():
    assert scan("ping @ad").is_mention
    assert scan("foo bar").word == "bar"
    assert scan("see example.com/x").word == "example.com/x"


def test_nothing_after_whitespace():
    assert scan("foo ") is None
    assert scan("") is None


def test_reads_up_to_the_caret_only():
    w = scan("#one two", offset=4)
    assert w.word == "#one"
    assert w.span == Span(0, 0, 4)


def test_container_start_has_nothing_before_it():
    s = Surface([TextRun("abc")], Position.container(0))
    assert word_before_cursor(s) is None


def test_container_caret_reads_previous_run():
    s = Surface([TextRun("abc")], Position.container(1))
    assert word_before_cursor(s).word == "abc"


def test_caret_after_chip_reads_its_label():
    s = Surface([TextRun("a "), chip_for(TagResource(tag="x"))], Position.container(2))
    w = word_before_cursor(s)
    assert w.word == "x"
    assert w.span == Span(1, 0, 1)


def test_explicit_position():
    s = Surface([TextRun("#a #b")], Position(0, 5))
    assert word_before_cursor(s, Position(0, 2)).word == "#a"


def test_newline_ends_a_word():
    assert scan("#urg\n") is None


def test_non_ascii_tag_is_a_plain_word():
    w = scan("see #café")
    assert w.word == "#café"
    assert w.span == Span(0, 4, 9)
