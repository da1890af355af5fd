"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: リサイズ可能な Pyglet Window（MSAA/背景クリア）と描画コールバック登録を提供。
なぜ: レンダラ/パイプライン層から GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(1280, 720, bg_color=(0, 0, 0, 1))

    def draw_scene():
        renderer.draw(...)

    win.add_draw_callback(draw_scene)
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor

logger = logging.getLogger(__name__)


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0),
        caption: str = "Lissadraw",
        vsync: bool = True,
        maximized: bool = False,
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            bg_color: 背景色 RGBA（0.0〜1.0）。
            caption: タイトル。
            vsync: 垂直同期。
            maximized: True で生成直後に最大化する。
        """
        # 線描画を滑らかにするために MSAA を有効化
        config = Config(double_buffer=True, sample_buffers=1, samples=4)
        try:
            super().__init__(
                width=width,
                height=height,
                caption=caption,
                config=config,
                resizable=True,
                vsync=vsync,
            )
        except pyglet.window.NoSuchConfigException:
            # MSAA 非対応環境では既定構成で開く
            logger.warning("MSAA config unavailable; falling back to default GL config")
            super().__init__(
                width=width, height=height, caption=caption, resizable=True, vsync=vsync
            )
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []
        if maximized:
            self.maximize()

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def framebuffer_size(self) -> tuple[int, int]:
        """実ピクセル単位の出力サイズ（高 DPI では論理サイズより大きい）。"""
        w, h = self.get_framebuffer_size()
        return int(w), int(h)

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。背景をクリアし、登録された描画コールバックを呼び出す。"""
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()
