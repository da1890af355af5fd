from __future__ import annotations

import logging

import pytest

from common.env import env_bool, env_int, env_str
from common.logging import resolve_level
from common.settings import get, reload_from_env


def test_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LXD_TEST_INT", raising=False)
    assert env_int("LXD_TEST_INT", 5) == 5
    monkeypatch.setenv("LXD_TEST_INT", " 12 ")
    assert env_int("LXD_TEST_INT") == 12
    monkeypatch.setenv("LXD_TEST_INT", "-3")
    assert env_int("LXD_TEST_INT", min_value=1) == 1
    monkeypatch.setenv("LXD_TEST_INT", "abc")
    assert env_int("LXD_TEST_INT", 7) == 7


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("0", False), ("yes", True), ("off", False), ("TRUE", True), ("maybe", None)],
)
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool | None) -> None:
    monkeypatch.setenv("LXD_TEST_BOOL", raw)
    assert env_bool("LXD_TEST_BOOL", None) is expected


def test_env_str_blank_is_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LXD_TEST_STR", "   ")
    assert env_str("LXD_TEST_STR", "x") == "x"
    monkeypatch.setenv("LXD_TEST_STR", " debug ")
    assert env_str("LXD_TEST_STR") == "debug"


def test_settings_default_to_unset() -> None:
    s = get()
    assert s.LOG_LEVEL is None
    assert s.FPS is None
    assert s.PATH_SUBDIVISIONS is None
    assert s.PARAMETER_GUI is None


def test_settings_reload_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LXD_LOG_LEVEL", "debug")
    monkeypatch.setenv("LXD_FPS", "0")
    monkeypatch.setenv("LXD_PATH_SUBDIVISIONS", "bogus")
    monkeypatch.setenv("LXD_PARAMETER_GUI", "off")
    reload_from_env()
    s = get()
    assert s.LOG_LEVEL == "DEBUG"
    assert s.FPS == 1
    assert s.PATH_SUBDIVISIONS is None
    assert s.PARAMETER_GUI is False


def test_resolve_level() -> None:
    assert resolve_level(None) == logging.INFO
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level(logging.DEBUG) == logging.DEBUG
