import pytest

from shelfhelpers.utils import format_duration, format_size, get_setting, load_config, save_config


def test_load_config_missing_file():
    assert load_config() == {}


def test_save_then_load_config(isolated_config):
    save_config({"editor": "vim", "pager": ["more"]})
    assert isolated_config.exists()
    assert load_config() == {"editor": "vim", "pager": ["more"]}


def test_load_config_broken_file(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("{not json")
    assert load_config() == {}


def test_get_setting():
    config = {"editor": "vim", "pager": [], "log_file": ""}
    assert get_setting("editor", "nano", config) == "vim"
    assert get_setting("pager", ["less"], config) == ["less"]
    assert get_setting("log_file", None, config) is None
    assert get_setting("missing", 3, config) == 3


def test_get_setting_reads_config_file():
    save_config({"console_log_level": "DEBUG"})
    assert get_setting("console_log_level") == "DEBUG"


@pytest.mark.parametrize("size, expected", [
    (0, "0.0B"),
    (1536, "1.5KB"),
    (5 * 1024 * 1024, "5.0MB"),
])
def test_format_size(size, expected):
    assert format_size(size) == expected


@pytest.mark.parametrize("seconds, expected", [
    (-1, "0ms"),
    (0.5, "500ms"),
    (12.34, "12.3s"),
    (245, "4m 05s"),
    (3720, "1h 02m"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
