"""Tests for the colour theme configuration."""

import json
from pathlib import Path
from unittest.mock import patch

from ctedit.buffer import Buffer
from ctedit.config import config_path, load_colour_overrides
from ctedit.highlight import HighlightTag


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


def test_default_location_uses_platformdirs(tmp_path):
    with patch('platformdirs.user_config_dir', return_value=str(tmp_path)) as user_config_dir:
        path = config_path()
    user_config_dir.assert_called_once_with("ctedit")
    assert path == tmp_path / "config.json"


def test_explicit_config_dir():
    assert config_path(Path("/etc/ctedit")) == Path("/etc/ctedit/config.json")


def test_missing_file_means_defaults(tmp_path):
    assert load_colour_overrides(tmp_path / "config.json") == {}


def test_overrides_by_tag_name(tmp_path):
    path = write_config(tmp_path, {"colours": {"keyword": "magenta", "search_result": "on_yellow"}})
    assert load_colour_overrides(path) == {
        HighlightTag.KEYWORD: "magenta",
        HighlightTag.SEARCH_RESULT: "on_yellow",
    }


def test_bad_entries_are_skipped(tmp_path, caplog):
    path = write_config(tmp_path, {"colours": {"keyword": "red", "bogus": "blue", "string": 3}})
    assert load_colour_overrides(path) == {HighlightTag.KEYWORD: "red"}
    assert "bogus" in caplog.text


def test_broken_file_is_ignored(tmp_path, caplog):
    path = write_config(tmp_path, "{ not json")
    assert load_colour_overrides(path) == {}
    assert "Could not read config" in caplog.text


def test_wrong_shape_is_ignored(tmp_path):
    assert load_colour_overrides(write_config(tmp_path, [1, 2])) == {}
    assert load_colour_overrides(write_config(tmp_path, {"colours": ["red"]})) == {}


def test_buffer_prefers_override_over_highlighter():
    buffer = Buffer()
    buffer.colour_overrides = {HighlightTag.KEYWORD: "magenta"}
    buffer.load(b"let x")
    assert buffer.line_segments(0, 0, 10) == [
        ("let", "magenta"),
        (" ", "normal"),
        ("x", "bright_cyan"),
    ]


def test_override_applies_without_highlighter():
    buffer = Buffer(syntax_highlight=None)
    buffer.colour_overrides = {HighlightTag.STANDARD: "white"}
    buffer.load(b"ab")
    assert buffer.line_segments(0, 0, 10) == [("ab", "white")]
