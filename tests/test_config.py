# tests/test_config.py
import json

import pytest

from smart_editor.utils.config_manager import DEFAULTS, Config


def test_creates_file_with_defaults(tmp_path):
    p = tmp_path / "cfg.json"
    cfg = Config(str(p))
    assert p.exists()
    assert cfg.get("strict_links") is False
    assert json.loads(p.read_text(encoding="utf8")) == DEFAULTS


def test_set_coerces_and_persists(tmp_path):
    p = tmp_path / "cfg.json"
    cfg = Config(str(p))
    cfg.set("autofocus", "off")
    cfg.set("available_tags", "ops, design,,")
    again = Config(str(p))
    assert again.get("autofocus") is False
    assert again.get("available_tags") == ["ops", "design"]


def test_unknown_key(tmp_path):
    cfg = Config(str(tmp_path / "cfg.json"))
    with pytest.raises(KeyError):
        cfg.set("colour", "red")


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("{not json", encoding="utf8")
    cfg = Config(str(p))
    assert cfg.get("placeholder") == DEFAULTS["placeholder"]
