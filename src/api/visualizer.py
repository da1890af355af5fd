"""
どこで: `api.visualizer`（実行ランナー）。
何を: 設定解決 → ウィンドウ/レンダラ生成 → パラメータ GUI → FrameClock を結線し、
      リサージュ曲線をフレームごとに再計算して描画する。
なぜ: 曲線計算（curves）・投影（engine.core.viewport）・描画（engine.render）・GUI（engine.ui）を
      1 箇所で組み立て、各層を互いに独立させたままにするため。

フレームの流れ（`FrameClock` が固定順序で tick）:
1) `AnimationClock.tick(dt)` — 経過時間を進める。
2) `ParameterController.tick(dt)` — GUI が積んだ更新を `ParameterState` へ適用。
3) `CurveFrameDriver.tick(dt)` — `build_frame()` でサンプル/パス/ビューポートを計算し GPU へ。
4) `RenderWindow.on_draw` — 背景クリア後、`PathRenderer.draw()` でストローク。

キー操作:
- `ESC` でウィンドウを閉じ、GPU リソースとパラメータ GUI を解放する。

例:
    from api import run_visualizer
    from curves import CurveParameters

    run_visualizer(CurveParameters(frequency_x=3, frequency_y=2, detail=720))
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Callable, Mapping, Sequence

from common.logging import setup_default_logging
from common.settings import get as get_settings
from curves.params import AnimationClock, CurveParameters, ParameterState
from engine.core.tickable import Tickable
from engine.ui.parameters.controller import ParameterController, ParameterWindowController
from engine.ui.parameters.state import ParameterUpdateQueue, ParameterWindowConfig
from util.utils import config_section, load_config

from .pipeline import build_frame
from .sketch_runner.utils import (
    resolve_colors,
    resolve_fps,
    resolve_initial_parameters,
    resolve_line_width,
    resolve_subdivisions,
    resolve_use_parameter_gui,
    resolve_window_size,
    resolve_work_size,
)

logger = logging.getLogger(__name__)


class CurveFrameDriver:
    """毎フレーム曲線を再計算し、レンダラへ渡す Tickable。"""

    def __init__(
        self,
        state: ParameterState,
        renderer: Any,
        output_size: Callable[[], tuple[int, int]],
        *,
        work_size: tuple[float, float],
        subdivisions: int,
    ) -> None:
        self._state = state
        self._renderer = renderer
        self._output_size = output_size
        self._work_size = work_size
        self._subdivisions = subdivisions

    def tick(self, dt: float) -> None:
        frame = build_frame(
            self._state,
            self._output_size(),
            work_size=self._work_size,
            subdivisions=self._subdivisions,
        )
        if frame is None:
            self._renderer.skip_frame()
            return
        self._renderer.set_viewport(frame.viewport)
        self._renderer.upload(frame.polyline)


def run_visualizer(
    params: CurveParameters | None = None,
    *,
    work_size: tuple[float, float] | None = None,
    fps: int | None = None,
    background: str | tuple[float, ...] | None = None,
    line_color: str | tuple[float, ...] | None = None,
    line_width: float | None = None,
    subdivisions: int | None = None,
    use_parameter_gui: bool | None = None,
    init_only: bool = False,
) -> ParameterState | None:
    """ビジュアライザを起動する。

    Parameters
    ----------
    params : CurveParameters | None
        初期パラメータ。None で設定ファイル `curve` → 既定値。
    work_size : tuple[float, float] | None
        論理キャンバスサイズ。None で設定 `canvas.work_size`（既定 1920×1080）。
    fps : int | None
        更新レート。None で環境変数 `LXD_FPS` → 設定 → 60。
    background, line_color : str | tuple | None
        色（Hex または RGBA）。None で設定値、線色は背景輝度から自動選択も可。
    line_width : float | None
        線幅（論理キャンバス単位）。None で設定値（既定 3）。
    subdivisions : int | None
        二次ベジェ 1 区間あたりの平坦化分割数。
    use_parameter_gui : bool | None
        Dear PyGui のパラメータウィンドウを開くか。
    init_only : bool, default False
        True で設定解決と状態生成だけを行い、GL/GUI を import せずに状態を返す。

    Returns
    -------
    ParameterState | None
        `init_only=True` のときのみ初期状態を返す。
    """
    cfg = load_config()
    fps_v = resolve_fps(fps, cfg)
    work = resolve_work_size(work_size, cfg)
    subdiv = resolve_subdivisions(subdivisions, cfg)
    gui_enabled = resolve_use_parameter_gui(use_parameter_gui, cfg)
    width_v = resolve_line_width(line_width, cfg)
    bg_rgba, line_rgba = resolve_colors(background, line_color, cfg)
    window_w, window_h = resolve_window_size(cfg)

    state = ParameterState(params=resolve_initial_parameters(params, cfg), clock=AnimationClock())
    queue = ParameterUpdateQueue()
    logger.info(
        "lissadraw: work=%gx%g fps=%d detail=%d gui=%s",
        work[0],
        work[1],
        fps_v,
        state.params.detail,
        gui_enabled,
    )

    if init_only:
        return state

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock

    from .sketch_runner.render import create_window_and_renderer

    rendering_window, _mgl_ctx, path_renderer = create_window_and_renderer(
        window_w,
        window_h,
        bg_rgba=bg_rgba,
        line_rgba=line_rgba,
        line_width=width_v,
        cfg=cfg,
    )
    rendering_window.add_draw_callback(path_renderer.draw)

    window_controller: ParameterWindowController | None = None
    if gui_enabled:
        gcfg = config_section(cfg, "parameter_gui")
        window_controller = ParameterWindowController(
            state,
            queue,
            window_cfg=ParameterWindowConfig(
                width=int(gcfg.get("width", 420)),
                height=int(gcfg.get("height", 640)),
                title=str(gcfg.get("title", "Curve Parameters")),
            ),
        )
        try:
            window_controller.start()
        except Exception:
            # GUI 無しでも曲線の描画は続ける
            logger.exception("failed to start parameter window; continuing without it")
            window_controller = None

    tickables: list[Tickable] = [
        state.clock,
        ParameterController(
            state,
            queue,
            on_change=window_controller.sync if window_controller is not None else None,
        ),
        CurveFrameDriver(
            state,
            path_renderer,
            rendering_window.framebuffer_size,
            work_size=work,
            subdivisions=subdiv,
        ),
    ]
    frame_clock = FrameClock(tickables)
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps_v)

    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            rendering_window.close()

    @rendering_window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        pyglet.clock.unschedule(frame_clock.tick)
        if window_controller is not None:
            try:
                window_controller.shutdown()
            except Exception:
                logger.exception("parameter window shutdown failed")
        path_renderer.release()
        setattr(on_close, "_closed", True)
        logger.info("lissadraw: closed after %d frames", frame_clock.frame_count)
        pyglet.app.exit()

    pyglet.app.run()
    return None


def _build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="lissadraw", description="Interactive Lissajous visualizer")
    ap.add_argument("--fps", type=int, default=None, help="update rate (default: config / 60)")
    ap.add_argument("--detail", type=int, default=None, help="initial sample count")
    ap.add_argument(
        "--work-size",
        type=float,
        nargs=2,
        metavar=("W", "H"),
        default=None,
        help="logical canvas size (default: 1920 1080)",
    )
    ap.add_argument("--no-gui", action="store_true", help="disable the parameter window")
    ap.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/...")
    return ap


def _params_from_args(args: argparse.Namespace, cfg: Mapping[str, Any]) -> CurveParameters | None:
    """CLI 引数から初期パラメータを作る（`--detail` 未指定なら None）。"""
    if args.detail is None:
        return None
    base = resolve_initial_parameters(None, cfg)
    return resolve_initial_parameters(base.replace_values({"detail": args.detail}), cfg)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI エントリポイント。"""
    args = _build_arg_parser().parse_args(argv)
    cfg = load_config()
    level = args.log_level or get_settings().LOG_LEVEL
    setup_default_logging(level or config_section(cfg, "logging").get("level"))

    params = _params_from_args(args, cfg)
    run_visualizer(
        params,
        work_size=tuple(args.work_size) if args.work_size else None,
        fps=args.fps,
        use_parameter_gui=False if args.no_gui else None,
    )
    return 0


__all__ = ["CurveFrameDriver", "run_visualizer", "main"]
