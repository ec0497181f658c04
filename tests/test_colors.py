# tests/test_colors.py
from smart_editor.core.colors import PALETTE, tag_class, tag_color, tag_hash


def test_small_hashes():
    # hash = code + ((hash << 5) - hash)
    assert tag_hash("") == 0
    assert tag_hash("a") == 97
    assert tag_hash("ab") == 98 + (97 * 32 - 97)


def test_color_is_deterministic():
    assert tag_color("") == "gray"
    assert tag_color("a") == "red"      # 97 % 8 == 1
    assert tag_color("b") == "yellow"   # 98 % 8 == 2
    assert tag_color("release") == tag_color("release")


def test_long_tags_stay_in_palette():
    tag = "a-very-long-tag-name-that-overflows-thirty-two-bits" * 3
    assert tag_color(tag) in PALETTE
    assert tag_color("日本語") in PALETTE
    assert tag_color("rocket\U0001F680") in PALETTE


def test_astral_characters_hash_as_surrogate_pairs():
    # U+1F680 is two UTF-16 units: 0xD83D 0xDE80
    hi, lo = 0xD83D, 0xDE80
    assert tag_hash("\U0001F680") == lo + (hi * 32 - hi)


def test_tag_class():
    assert tag_class("a") == "tag-pill tag-pill-red"
