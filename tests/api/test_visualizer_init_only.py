from __future__ import annotations

import sys

import numpy as np

from api.visualizer import CurveFrameDriver, _build_arg_parser, _params_from_args, run_visualizer
from curves.params import CurveParameters, ParameterState


class _FakeRenderer:
    def __init__(self) -> None:
        self.viewports: list = []
        self.uploads: list[np.ndarray] = []
        self.skipped = 0

    def set_viewport(self, viewport) -> None:  # noqa: ANN001
        self.viewports.append(viewport)

    def upload(self, polyline: np.ndarray) -> None:
        self.uploads.append(polyline)

    def skip_frame(self) -> None:
        self.skipped += 1


def test_init_only_returns_state_without_gui_imports() -> None:
    sys.modules.pop("pyglet", None)
    sys.modules.pop("dearpygui", None)
    state = run_visualizer(init_only=True)
    assert isinstance(state, ParameterState)
    assert state.params == CurveParameters()
    assert state.time == 0.0
    assert "pyglet" not in sys.modules
    assert "dearpygui" not in sys.modules


def test_init_only_uses_explicit_params_and_repairs_them() -> None:
    params = CurveParameters(frequency_x=3.0, detail=-4)
    state = run_visualizer(params, init_only=True)
    assert state is not None
    assert state.params.frequency_x == 3.0
    assert state.params.detail == 0


def test_frame_driver_uploads_each_tick(default_state: ParameterState) -> None:
    r = _FakeRenderer()
    driver = CurveFrameDriver(
        default_state, r, lambda: (960, 1080), work_size=(1920.0, 1080.0), subdivisions=2
    )
    driver.tick(0.016)
    assert len(r.uploads) == 1
    assert r.uploads[0].shape == (500 * 2 + 1, 2)
    assert r.viewports[0].ratio == 0.5
    assert r.skipped == 0


def test_frame_driver_skips_minimized_window(default_state: ParameterState) -> None:
    r = _FakeRenderer()
    driver = CurveFrameDriver(
        default_state, r, lambda: (0, 0), work_size=(1920.0, 1080.0), subdivisions=4
    )
    driver.tick(0.016)
    assert r.skipped == 1
    assert r.uploads == []


def test_arg_parser() -> None:
    args = _build_arg_parser().parse_args(
        ["--fps", "30", "--detail", "720", "--work-size", "800", "600", "--no-gui"]
    )
    assert args.fps == 30
    assert args.detail == 720
    assert args.work_size == [800.0, 600.0]
    assert args.no_gui is True
    assert args.log_level is None


def test_cli_detail_is_clamped_to_slider_range() -> None:
    args = _build_arg_parser().parse_args(["--detail", "50000000"])
    params = _params_from_args(args, {"curve": {"detail": 20}})
    assert params is not None
    assert params.detail == 5000
    state = run_visualizer(params, init_only=True)
    assert state is not None and state.params.detail == 5000


def test_cli_without_detail_defers_to_config() -> None:
    args = _build_arg_parser().parse_args([])
    assert _params_from_args(args, {"curve": {"detail": 20}}) is None
