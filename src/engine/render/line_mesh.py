"""
どこで: `engine.render` の低レベルメッシュ層。
何を: VBO/VAO の確保・更新・解放を担当し、1 本の連続折れ線（LINE_STRIP）を保持する。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np


class LineMesh:
    """
    GPU に折れ線の頂点データを送り込む作業を管理
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 初期確保量（既定: 1MB ≒ 13 万頂点）。必要に応じて自動拡張。
        initial_reserve: int = 1024 * 1024,
    ):
        """
        ctx: ModernGL コンテキスト
        program: `in_vert`（vec2）を入力に持つシェーダープログラム
        VBO (Vertex Buffer Object): GPU に送る頂点データを格納するメモリ。
        VAO (Vertex Array Object): VBO とプログラム入力の対応付け。
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = ctx.simple_vertex_array(program, self.vbo, "in_vert")

        # 描画ステート
        self.vertex_count: int = 0

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, nbytes: int) -> None:
        """データが大きくなったら GPU のバッファを再確保し、VAO を張り直す"""
        if nbytes <= self.vbo.size:
            return
        self.vbo.release()
        self.vao.release()
        self.vbo = self.ctx.buffer(reserve=max(nbytes, self.initial_reserve * 2), dynamic=True)
        self.vao = self.ctx.simple_vertex_array(self.program, self.vbo, "in_vert")

    def upload(self, vertices: np.ndarray) -> None:
        """(N, 2) float32 の頂点列を GPU へ送り込む"""
        self._ensure_capacity(vertices.nbytes)
        self.vbo.orphan()
        self.vbo.write(vertices.tobytes())
        self.vertex_count = int(vertices.shape[0])

    def clear(self) -> None:
        """次の描画で何も出さない（GPU メモリは保持）。"""
        self.vertex_count = 0

    def render(self, mode: int) -> None:
        """2 頂点以上あるときだけ描画する。"""
        if self.vertex_count >= 2:
            self.vao.render(mode, vertices=self.vertex_count)

    def release(self) -> None:
        """GPU のメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.vao.release()
