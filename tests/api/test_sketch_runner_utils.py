from __future__ import annotations

import pytest

from api.sketch_runner.utils import (
    resolve_colors,
    resolve_fps,
    resolve_initial_parameters,
    resolve_line_width,
    resolve_subdivisions,
    resolve_use_parameter_gui,
    resolve_window_size,
    resolve_work_size,
)
from common.settings import reload_from_env
from curves.params import CurveParameters
from util.constants import DEFAULT_WORK_SIZE


def test_resolve_fps_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = {"canvas_controller": {"fps": 24}}
    assert resolve_fps(None, None) == 60
    assert resolve_fps(None, cfg) == 24
    monkeypatch.setenv("LXD_FPS", "50")
    reload_from_env()
    assert resolve_fps(None, cfg) == 50
    assert resolve_fps(12, cfg) == 12


def test_resolve_fps_guards_bad_values() -> None:
    assert resolve_fps(0) == 1
    assert resolve_fps(None, {"canvas_controller": {"fps": "fast"}}) == 60


def test_resolve_work_size() -> None:
    assert resolve_work_size(None, None) == DEFAULT_WORK_SIZE
    assert resolve_work_size(None, {"canvas": {"work_size": [800, 600]}}) == (800.0, 600.0)
    assert resolve_work_size((640, 480), None) == (640.0, 480.0)


def test_resolve_work_size_invalid_explicit_raises() -> None:
    with pytest.raises(ValueError):
        resolve_work_size((0, 480), None)
    with pytest.raises(ValueError):
        resolve_work_size(("a", 1), None)


def test_resolve_work_size_invalid_config_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    assert resolve_work_size(None, {"canvas": {"work_size": [-1, 5]}}) == DEFAULT_WORK_SIZE
    assert any("work_size" in r.message for r in caplog.records)


def test_resolve_subdivisions_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_subdivisions(None, None) == 4
    assert resolve_subdivisions(None, {"path": {"subdivisions": 8}}) == 8
    monkeypatch.setenv("LXD_PATH_SUBDIVISIONS", "2")
    reload_from_env()
    assert resolve_subdivisions(None, {"path": {"subdivisions": 8}}) == 2
    assert resolve_subdivisions(6, None) == 6


def test_resolve_use_parameter_gui(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_use_parameter_gui(None, None) is True
    assert resolve_use_parameter_gui(None, {"parameter_gui": {"enabled": False}}) is False
    monkeypatch.setenv("LXD_PARAMETER_GUI", "1")
    reload_from_env()
    assert resolve_use_parameter_gui(None, {"parameter_gui": {"enabled": False}}) is True
    assert resolve_use_parameter_gui(False, None) is False


def test_resolve_line_width() -> None:
    assert resolve_line_width(None, None) == 3.0
    assert resolve_line_width(None, {"canvas": {"line_width": 1.5}}) == 1.5
    assert resolve_line_width(-2.0, None) == 3.0
    assert resolve_line_width(None, {"canvas": {"line_width": "thick"}}) == 3.0


def test_resolve_colors() -> None:
    bg, line = resolve_colors(None, None, None)
    assert bg == (0.0, 0.0, 0.0, 1.0)
    assert line == (1.0, 1.0, 1.0, 1.0)  # 黒背景 → 白線
    bg, line = resolve_colors("#FFFFFF", None, None)
    assert line == (0.0, 0.0, 0.0, 1.0)
    _, line = resolve_colors(None, None, {"canvas": {"line_color": "#FF00FF"}})
    assert line == (1.0, 0.0, 1.0, 1.0)


def test_resolve_colors_invalid_explicit_raises() -> None:
    with pytest.raises(ValueError):
        resolve_colors("not-a-color", None, None)


def test_resolve_colors_invalid_config_falls_back() -> None:
    bg, line = resolve_colors(None, None, {"canvas": {"background_color": "zz", "line_color": 3}})
    assert bg == (0.0, 0.0, 0.0, 1.0)
    assert line == (1.0, 1.0, 1.0, 1.0)


def test_resolve_window_size() -> None:
    assert resolve_window_size(None) == (1280, 720)
    assert resolve_window_size({"window": {"width": 640, "height": "x"}}) == (640, 720)


def test_resolve_initial_parameters() -> None:
    assert resolve_initial_parameters(None, None) == CurveParameters()
    p = resolve_initial_parameters(None, {"curve": {"detail": 30, "frequency_x": 2}})
    assert p.detail == 30 and p.frequency_x == 2.0
    explicit = CurveParameters(detail=7)
    assert resolve_initial_parameters(explicit, {"curve": {"detail": 30}}) is explicit


def test_resolve_initial_parameters_bad_config() -> None:
    p = resolve_initial_parameters(None, {"curve": {"detail": "many"}})
    assert p == CurveParameters()


def test_resolve_initial_parameters_clamps_oversized_config_detail(
    caplog: pytest.LogCaptureFixture,
) -> None:
    p = resolve_initial_parameters(None, {"curve": {"detail": 10_000_000}})
    assert p.detail == 5000
    assert any("out of range" in r.message for r in caplog.records)


def test_resolve_initial_parameters_clamps_oversized_explicit_detail() -> None:
    p = resolve_initial_parameters(CurveParameters(frequency_x=3.0, detail=50_000_000), None)
    assert p.detail == 5000
    assert p.frequency_x == 3.0
