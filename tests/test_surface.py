# tests/test_surface.py - caret bookkeeping and editing primitives
from smart_editor.core.codec import chip_for
from smart_editor.core.document import TagResource
from smart_editor.core.surface import Chip, Position, Shadow, Span, Surface, TextRun


def tag_chip(tag="x"):
    return chip_for(TagResource(tag=tag))


def test_insert_text_merges_into_neighbour_run():
    s = Surface()
    s.insert_text("he")
    s.insert_text("llo")
    assert s.nodes == [TextRun("hello")]
    assert s.caret == Position(0, 5)


def test_insert_node_splits_a_run():
    s = Surface([TextRun("abcd")], Position(0, 2))
    s.insert_node(tag_chip())
    assert [type(n) for n in s.nodes] == [TextRun, Chip, TextRun]
    assert s.nodes[0].text == "ab" and s.nodes[2].text == "cd"
    assert s.caret == Position.container(2)
    assert s.text_content() == "abxcd"


def test_caret_steps_over_chips():
    s = Surface([TextRun("ab"), tag_chip(), TextRun("cd")], Position.container(2))
    s.move_left()
    assert s.caret == Position.container(1)
    s.move_left()
    assert s.caret == Position(0, 1)
    s.move_home()
    s.move_left()
    assert s.caret == Position.container(0)
    s.move_end()
    assert s.caret == Position(2, 2)


def test_delete_backward_removes_whole_chip():
    s = Surface([TextRun("ab"), tag_chip()], Position.container(2))
    assert s.chip_before_caret() == 1
    assert s.delete_backward()
    assert s.nodes == [TextRun("ab")]
    assert s.delete_backward()
    assert s.nodes[0].text == "a"


def test_chip_before_caret_at_run_start():
    s = Surface([tag_chip(), TextRun(" now")], Position(1, 0))
    assert s.chip_before_caret() == 0
    s.set_caret(Position(1, 1))
    assert s.chip_before_caret() is None


def test_delete_span_moves_caret_back():
    s = Surface([TextRun("fix #bug")], Position(0, 8))
    at = s.delete_span(Span(0, 4, 8))
    assert s.nodes[0].text == "fix "
    assert at == Position(0, 4)
    assert s.caret == Position(0, 4)


def test_replace_span_places_caret_after_last_node():
    s = Surface([TextRun("fix #bug")], Position(0, 8))
    s.replace_span(Span(0, 4, 8), tag_chip("bug"), TextRun(" "))
    assert s.text_content() == "fix bug "
    assert isinstance(s.nodes[1], Chip)
    assert s.caret == Position(2, 1)


def test_shadow_does_not_move_caret_and_is_not_text():
    s = Surface([TextRun("#urg")], Position(0, 4))
    s.insert_shadow("ent")
    assert s.shadow() == Shadow("ent")
    assert s.caret == Position(0, 4)
    assert s.text_content() == "#urg"


def test_remove_shadow_rejoins_runs():
    s = Surface([TextRun("ab"), Shadow("zz"), TextRun("cd")], Position(2, 1))
    assert s.remove_shadow()
    assert s.nodes == [TextRun("abcd")]
    assert s.caret == Position(0, 3)
    assert not s.remove_shadow()


def test_clamp_bad_positions():
    s = Surface([TextRun("ab")], Position(0, 99))
    assert s.caret == Position(0, 2)
    s.set_caret(Position.container(-3))
    assert s.caret == Position.container(0)
