import logging

import pytest

from sleeptracker.utils import logging as logging_utils


@pytest.fixture(autouse=True)
def _restore_root_level(monkeypatch):
    monkeypatch.delenv("SLEEPTRACKER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SLEEPTRACKER_DEBUG", raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_configure_root_uses_default_level():
    assert logging_utils.configure_root(logging.WARNING) == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_explicit_env_level_wins(monkeypatch):
    monkeypatch.setenv("SLEEPTRACKER_LOG_LEVEL", "error")
    assert logging_utils.configure_root("INFO") == logging.ERROR
    assert logging_utils.apply_preferences(True) == logging.ERROR
    assert logging_utils.env_requests_debug() is False


def test_debug_flag_forces_debug(monkeypatch):
    monkeypatch.setenv("SLEEPTRACKER_DEBUG", "1")
    assert logging_utils.env_requests_debug() is True
    assert logging_utils.apply_preferences(False) == logging.DEBUG


def test_preferences_apply_without_env():
    assert logging_utils.apply_preferences(True) == logging.DEBUG
    assert logging_utils.apply_preferences(False) == logging.INFO


@pytest.mark.parametrize(
    ("text", "level"),
    [("debug", logging.DEBUG), (" Warning ", logging.WARNING), ("15", 15), ("²", None), ("chatty", None), ("", None), (None, None)],
)
def test_parse_level(text, level):
    assert logging_utils.parse_level(text) == level


def test_unparsable_env_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("SLEEPTRACKER_LOG_LEVEL", "²")
    assert logging_utils.configure_root(logging.WARNING) == logging.INFO
