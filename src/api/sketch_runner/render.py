"""
どこで: `api.sketch_runner.render`
何を: RenderWindow/ModernGL/PathRenderer の初期化。
なぜ: `api.visualizer` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

from typing import Any, Mapping

import moderngl

from util.utils import config_section


def create_window_and_renderer(
    window_width: int,
    window_height: int,
    *,
    bg_rgba: tuple[float, float, float, float],
    line_rgba: tuple[float, float, float, float],
    line_width: float,
    cfg: Mapping[str, Any] | None = None,
):
    """ウィンドウ/ModernGL/PathRenderer を生成して返す。

    Returns
    -------
    (rendering_window, mgl_ctx, path_renderer)
    """

    from engine.core.render_window import RenderWindow
    from engine.render.renderer import PathRenderer

    wcfg = config_section(cfg, "window")
    rendering_window = RenderWindow(
        window_width,
        window_height,
        bg_color=bg_rgba,
        caption=str(wcfg.get("caption", "Lissadraw")),
        vsync=bool(wcfg.get("vsync", True)),
        maximized=bool(wcfg.get("maximized", False)),
    )

    # ModernGL コンテキスト（pyglet が作った GL コンテキストを共有）
    mgl_ctx: moderngl.Context = moderngl.create_context()
    mgl_ctx.enable(moderngl.BLEND)
    mgl_ctx.blend_func = (moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA)

    path_renderer = PathRenderer(
        mgl_context=mgl_ctx,
        line_width=line_width,
        line_color=line_rgba,
    )
    return rendering_window, mgl_ctx, path_renderer


__all__ = ["create_window_and_renderer"]
