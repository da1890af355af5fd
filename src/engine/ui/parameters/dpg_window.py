"""
どこで: `engine.ui.parameters` の Dear PyGui 実装。
何を: `CURVE_PARAMETERS` から見出し付きスライダー群を生成し、操作をクランプ済み更新としてキューへ積む。
なぜ: コントロール面は「値を積むだけ」に徹し、曲線状態の変更はオーケストレーション側に任せるため。
"""

from __future__ import annotations

import logging
from threading import Thread
from typing import Any, Mapping

import dearpygui.dearpygui as dpg  # type: ignore

from .state import CURVE_PARAMETERS, ParameterDescriptor, ParameterUpdateQueue

# タグ定数
ROOT_TAG = "__lxd_param_root__"

logger = logging.getLogger("engine.ui.parameters.dpg")


def _slider_tag(pid: str) -> str:
    return f"__lxd_param__{pid}"


class ParameterWindow:
    """Dear PyGui によるパラメータウィンドウ実装。"""

    def __init__(
        self,
        *,
        queue: ParameterUpdateQueue,
        initial: Mapping[str, Any] | None = None,
        width: int = 420,
        height: int = 640,
        title: str = "Curve Parameters",
    ) -> None:
        self._queue = queue
        self._width = width
        self._height = height
        self._title = title
        self._driver: Any | None = None
        self._closing: bool = False

        dpg.create_context()
        self._viewport = dpg.create_viewport(
            title=self._title,
            width=self._width,
            height=self._height,
        )
        dpg.setup_dearpygui()

        self._build_root_window(dict(initial or {}))
        dpg.set_primary_window(ROOT_TAG, True)

        dpg.show_viewport()
        self._start_driver()

    def close(self) -> None:
        # 閉鎖フラグを最初に立て、以降の _tick を無害化
        self._closing = True
        # ドライバ停止 → コンテキスト破棄（順序厳守）
        self._stop_driver()
        try:
            dpg.stop_dearpygui()
        except Exception:
            logger.debug("stop_dearpygui failed", exc_info=True)
        try:
            dpg.destroy_context()
        except Exception:
            logger.debug("destroy_context failed", exc_info=True)

    def set_value(self, pid: str, value: Any) -> None:
        """外部からスライダー表示を同期する（キューへは積まない）。"""
        tag = _slider_tag(pid)
        if dpg.does_item_exist(tag):
            dpg.set_value(tag, value)

    # ---- internal: layout ----
    def _build_root_window(self, initial: dict[str, Any]) -> None:
        with dpg.window(tag=ROOT_TAG, label=self._title, no_close=True):
            current_category: str | None = None
            for desc in CURVE_PARAMETERS:
                if desc.category != current_category:
                    if current_category is not None:
                        dpg.add_separator()
                    dpg.add_text(desc.category, wrap=self._width - 40)
                    current_category = desc.category
                if desc.help_text:
                    dpg.add_text(desc.help_text, wrap=self._width - 40, color=(180, 180, 180))
                self._add_slider(desc, initial.get(desc.id, desc.default_value))

    def _add_slider(self, desc: ParameterDescriptor, value: Any) -> None:
        hint = desc.range_hint
        if desc.value_type == "int":
            dpg.add_slider_int(
                tag=_slider_tag(desc.id),
                label=desc.label,
                default_value=int(desc.clamp(value)),
                min_value=int(hint.min_value),
                max_value=int(hint.max_value),
                callback=self._on_slider,
                user_data=desc.id,
            )
        else:
            dpg.add_slider_float(
                tag=_slider_tag(desc.id),
                label=desc.label,
                default_value=float(desc.clamp(value)),
                min_value=float(hint.min_value),
                max_value=float(hint.max_value),
                callback=self._on_slider,
                user_data=desc.id,
            )

    def _on_slider(self, _sender: Any, app_data: Any, user_data: Any) -> None:
        try:
            self._queue.push(str(user_data), app_data)
        except (KeyError, TypeError, ValueError):
            logger.exception("rejected slider value %r for %r", app_data, user_data)

    # ---- internal: drivers ----
    def _tick(self, _dt: float) -> None:  # noqa: ANN001
        if self._closing:
            return
        if not dpg.is_dearpygui_running():
            self._closing = True
            self._stop_driver()
            return
        try:
            dpg.render_dearpygui_frame()
        except Exception:
            logger.exception("render_dearpygui_frame failed")

    def _start_driver(self) -> None:
        if self._driver is not None:
            return
        # メインスレッドの pyglet clock を優先し、無ければバックグラウンドスレッドで回す
        try:
            import pyglet  # type: ignore

            interval = 1.0 / 60.0
            pyglet.clock.schedule_interval(self._tick, interval)
            self._driver = ("pyglet", self._tick)
            logger.debug("ParameterWindow: pyglet driver started")
        except ImportError:
            t = Thread(target=dpg.start_dearpygui, name="DPGLoop", daemon=True)
            t.start()
            self._driver = ("thread", t)
            logger.debug("ParameterWindow: thread driver started")

    def _stop_driver(self) -> None:
        drv = self._driver
        self._driver = None
        if drv is None:
            return
        kind, handle = drv
        if kind == "pyglet":
            import pyglet  # type: ignore

            pyglet.clock.unschedule(handle)
        elif kind == "thread":
            try:
                dpg.stop_dearpygui()
            except Exception:
                logger.exception("failed to stop driver: %s", kind)
