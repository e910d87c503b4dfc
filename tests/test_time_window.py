"""Tests for adboard.time_window presets and parsing."""
import pytest

from adboard.time_window import PRESETS, parse_custom_minutes, window_label, window_options


@pytest.mark.parametrize("text, expected", [("45", 45), (" 90 ", 90), (15, 15)])
def test_parse_custom_minutes(text, expected):
    assert parse_custom_minutes(text) == expected


@pytest.mark.parametrize("text", [None, "", "0", "-3", "1.5", "abc"])
def test_parse_custom_minutes_rejects(text):
    assert parse_custom_minutes(text) is None


def test_window_label():
    assert window_label(30) == "近30分钟"
    assert window_label(360) == "近6小时"
    assert window_label(45) == "近45分钟"


def test_window_options_append_custom_value():
    assert window_options(60) == list(PRESETS)
    assert window_options(45) == list(PRESETS) + [45]
    assert window_options() == list(PRESETS)
