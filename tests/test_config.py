import pytest

import main
from sparkplug.config import DEFAULT_CONFIG, load_config
from sparkplug.focus import TimerSettings


def test_defaults_without_file():
    config = load_config(None)
    assert config == DEFAULT_CONFIG
    assert config["tick_ms"] == 600


def test_yaml_overrides_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("tick_ms: 300\ngarbage_rows: 4\n")
    config = load_config(path)
    assert config["tick_ms"] == 300
    assert config["garbage_rows"] == 4
    assert config["board_width"] == 10


def test_garbage_rows_are_clamped(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("garbage_rows: 50\n")
    assert load_config(path)["garbage_rows"] == 10


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_timer_defaults_match_timer_settings():
    for config in (load_config(None), load_config(main.DEFAULT_CONFIG_PATH)):
        assert TimerSettings.from_dict(config) == TimerSettings()


def test_yaml_sets_timer_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("focus_len: 45\nbreak_len: 10\n")
    timer = TimerSettings.from_dict(load_config(path))
    assert (timer.focus_len, timer.break_len, timer.long_break_len) == (45, 10, 15)
