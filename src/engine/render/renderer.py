"""
どこで: `engine.render` の高レベル描画。
何を: フレームごとの折れ線を GPU へ転送し、ビューポート変換・線幅・線色を適用して描画する。
なぜ: 毎フレームのアップロード/描画/リソース寿命を一箇所に集約し、描画処理を単純化するため。
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import moderngl as mgl
import numpy as np

from engine.core.viewport import ViewportTransform
from util.color import normalize_color

from .line_mesh import LineMesh
from .shader import Shader

# 線幅の下限（0 幅はフラグメントシェーダのアンチエイリアス計算を壊すため）
MIN_LINE_WIDTH = 1e-3


def polyline_to_vertices(polyline: np.ndarray) -> np.ndarray:
    """折れ線を VBO 用の (N, 2) float32 C 連続配列へ整形する。

    例外:
        ValueError: 形状が (N, 2) でない場合。
    """
    arr = np.asarray(polyline, dtype=np.float32)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"polyline must have shape (N, 2), got {arr.shape}")
    return np.ascontiguousarray(arr)


class PathRenderer:
    """
    スムーズパスを平坦化した折れ線を受け取り、1 本の連続ストロークとして描画する。
    """

    def __init__(
        self,
        mgl_context: Any,
        *,
        line_width: float = 3.0,
        line_color: Sequence[float] | str = (1.0, 0.0, 1.0, 1.0),
    ):
        self.ctx = mgl_context
        self._logger = logging.getLogger(__name__)

        self.line_program = Shader.create_shader(mgl_context)
        self._line_width = max(MIN_LINE_WIDTH, float(line_width))
        self.line_program["line_width"].value = self._line_width
        self.line_program["pixel_size"].value = 1.0
        self._line_color = normalize_color(line_color)
        self.line_program["color"].value = self._line_color

        self.gpu = LineMesh(ctx=mgl_context, program=self.line_program)
        self._viewport: ViewportTransform | None = None
        self._last_vertex_count: int = 0

    # ------------------------------------------------------------------ #
    # Public drawing API                                                 #
    # ------------------------------------------------------------------ #
    def set_viewport(self, viewport: ViewportTransform) -> None:
        """ビューポート変換を投影行列として適用する（同一入力なら再書き込みしない）。"""
        if viewport == self._viewport:
            return
        self.line_program["projection"].write(viewport.gl_matrix().tobytes())
        self.line_program["pixel_size"].value = 1.0 / viewport.ratio
        w, h = viewport.out_size
        self.ctx.viewport = (0, 0, int(w), int(h))
        self._viewport = viewport

    def upload(self, polyline: np.ndarray) -> None:
        """1 フレーム分の折れ線を GPU へ送る。空なら描画をスキップ状態にする。"""
        verts = polyline_to_vertices(polyline)
        if verts.shape[0] < 2:
            self.gpu.clear()
            self._last_vertex_count = 0
            return
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "Uploading path: verts=%d (%.1f KB)", len(verts), verts.nbytes / 1024.0
            )
        self.gpu.upload(verts)
        self._last_vertex_count = int(verts.shape[0])

    def skip_frame(self) -> None:
        """このフレームは何も描かない。"""
        self.gpu.clear()
        self._last_vertex_count = 0

    def draw(self) -> None:
        """GPU に送ったデータを画面に描画"""
        if self._viewport is None:
            return
        self.gpu.render(mgl.LINE_STRIP)

    def set_line_color(self, rgba: Sequence[float] | str) -> None:
        """線色（RGBA 0–1 / Hex）を更新する。"""
        self._line_color = normalize_color(rgba)
        self.line_program["color"].value = self._line_color

    def set_line_width(self, value: float) -> None:
        """線幅（論理キャンバス単位）を更新する。"""
        self._line_width = max(MIN_LINE_WIDTH, float(value))
        self.line_program["line_width"].value = self._line_width

    def get_last_vertex_count(self) -> int:
        return self._last_vertex_count

    def release(self) -> None:
        """GPU リソースを解放。"""
        self.gpu.release()
        self.line_program.release()


__all__ = ["PathRenderer", "polyline_to_vertices", "MIN_LINE_WIDTH"]
