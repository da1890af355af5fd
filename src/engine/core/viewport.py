"""
どこで: `engine.core.viewport`（ビューポート投影）。
何を: 固定サイズの論理キャンバスを任意サイズの出力面へ「等倍率で収めて中央寄せ」する変換を計算する。
なぜ: ウィンドウのリサイズやアスペクト比の違いに対して、歪みなくレターボックス表示するため。

座標系:
- 出力面は左上原点・X 右向き・Y 下向き（スクリーン座標）。
- 論理点 p は `p * ratio + (offset_x, offset_y)` で出力ピクセルへ写る。
- `matrix()` はこれをさらに正射影（スクリーン→クリップ空間）と合成した `P · T · S`。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


class DegenerateViewport(ValueError):
    """出力/論理サイズが 0 以下または非有限のときに送出する（そのフレームは描画をスキップ）。"""


def _check_size(size: tuple[float, float], what: str) -> tuple[float, float]:
    try:
        w, h = float(size[0]), float(size[1])
    except (TypeError, ValueError, IndexError) as e:
        raise DegenerateViewport(f"invalid {what} size: {size!r}") from e
    if not (math.isfinite(w) and math.isfinite(h)) or w <= 0.0 or h <= 0.0:
        raise DegenerateViewport(f"{what} size must be positive, got {(w, h)}")
    return w, h


def build_screen_projection(width: float, height: float) -> np.ndarray:
    """左上原点・Y 下向きのスクリーン座標 [0,w]×[0,h] をクリップ空間へ写す正射影（行優先）。"""
    return np.array(
        [
            [2.0 / width, 0.0, 0.0, -1.0],
            [0.0, -2.0 / height, 0.0, 1.0],
            [0.0, 0.0, -1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


@dataclass(frozen=True)
class ViewportTransform:
    """1 フレーム分の出力サイズに対するスケール + 平行移動。"""

    ratio: float
    offset_x: float
    offset_y: float
    work_size: tuple[float, float]
    out_size: tuple[float, float]

    @property
    def padding(self) -> tuple[float, float]:
        """(左右それぞれ, 上下それぞれ) のレターボックス余白 [px]。"""
        return self.offset_x, self.offset_y

    @property
    def content_size(self) -> tuple[float, float]:
        """出力面上でのキャンバス描画サイズ [px]。"""
        return self.work_size[0] * self.ratio, self.work_size[1] * self.ratio

    def apply(self, points: np.ndarray) -> np.ndarray:
        """論理座標 (N, 2) を出力ピクセル座標へ写す。"""
        pts = np.asarray(points, dtype=np.float64)
        return pts * self.ratio + np.array([self.offset_x, self.offset_y])

    def matrix(self) -> np.ndarray:
        """正射影と合成した 4×4 変換（行優先, float64）。"""
        proj = build_screen_projection(*self.out_size)
        translation = np.eye(4)
        translation[0, 3] = self.offset_x
        translation[1, 3] = self.offset_y
        scale = np.diag([self.ratio, self.ratio, 1.0, 1.0])
        return proj @ translation @ scale

    def gl_matrix(self) -> np.ndarray:
        """シェーダの mat4 uniform 用（列優先に転置した float32）。"""
        return np.ascontiguousarray(self.matrix().T, dtype="f4")


def compute_viewport(
    work_size: tuple[float, float],
    out_size: tuple[float, float],
) -> ViewportTransform:
    """論理キャンバスを出力面へ収めて中央寄せする変換を返す。

    - ratio = min(out_w / work_w, out_h / work_h)
    - 余白は (out - work * ratio) / 2 を各軸で均等に割り当てる。

    例外:
        DegenerateViewport: いずれかの寸法が 0 以下または非有限。
    """
    work_w, work_h = _check_size(work_size, "work")
    out_w, out_h = _check_size(out_size, "output")
    ratio = min(out_w / work_w, out_h / work_h)
    offset_x = (out_w - work_w * ratio) * 0.5
    offset_y = (out_h - work_h * ratio) * 0.5
    return ViewportTransform(
        ratio=ratio,
        offset_x=offset_x,
        offset_y=offset_y,
        work_size=(work_w, work_h),
        out_size=(out_w, out_h),
    )


__all__ = [
    "DegenerateViewport",
    "ViewportTransform",
    "build_screen_projection",
    "compute_viewport",
]
