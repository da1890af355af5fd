"""
どこで: `curves.sampler`（曲線サンプラ）。
何を: `CurveParameters` と時刻から、和-正弦曲線上の (点, 次の点) 対の列を生成する純関数。
なぜ: 毎フレーム全サンプルを作り直す前提で、NumPy の一括評価により高サンプル数でも軽く保つため。

定義:
- t_i = deg2rad(i)（1 サンプルにつき 1 度。detail > 360 は角度範囲を延長する）
- x(t) = Ax · sin(fx · t + φx + time) + cx
- y(t) = Ay · sin(fy · t + φy + time) + cy
- 対 i = ((x(t_i), y(t_i)), (x(t_{i+1}), y(t_{i+1})))

`n+1` 点を 1 回だけ評価し、`points = xy[:-1]`, `next_points = xy[1:]` とスライスするため、
`points[i+1] == next_points[i]` はビット単位で成り立つ。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from common.types import Vec2
from util.constants import DEFAULT_WORK_SIZE

from .params import CurveParameters

Point = Vec2


def default_center(work_size: tuple[float, float] = DEFAULT_WORK_SIZE) -> tuple[float, float]:
    """論理キャンバスの中心を返す。"""
    return float(work_size[0]) / 2.0, float(work_size[1]) / 2.0


@dataclass(frozen=True)
class CurveSamples:
    """1 フレーム分のサンプル対。

    - `points`: (n, 2) float64, 各サンプル点。
    - `next_points`: (n, 2) float64, 各サンプルの次の点。
    - 反復すると `(point, next_point)` のタプル対を順に返す（何度でも反復可能）。
    """

    points: np.ndarray
    next_points: np.ndarray

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def __iter__(self) -> Iterator[tuple[Point, Point]]:
        for p, q in zip(self.points, self.next_points):
            yield (float(p[0]), float(p[1])), (float(q[0]), float(q[1]))

    @property
    def is_empty(self) -> bool:
        return self.points.shape[0] == 0

    @classmethod
    def empty(cls) -> "CurveSamples":
        z = np.empty((0, 2), dtype=np.float64)
        return cls(points=z, next_points=z.copy())


def evaluate_curve(
    params: CurveParameters,
    t: np.ndarray,
    time: float,
    center: tuple[float, float],
) -> np.ndarray:
    """角度配列 `t` [rad] における曲線上の点 (len(t), 2) を返す。"""
    cx, cy = center
    x = params.amplitude_x * np.sin(params.frequency_x * t + (params.phase_x + time)) + cx
    y = params.amplitude_y * np.sin(params.frequency_y * t + (params.phase_y + time)) + cy
    return np.stack([x, y], axis=1)


def sample_curve(
    params: CurveParameters,
    time: float = 0.0,
    *,
    center: tuple[float, float] | None = None,
) -> CurveSamples:
    """曲線を `params.detail` 個の (点, 次の点) 対としてサンプリングする。

    Parameters
    ----------
    params : CurveParameters
        曲線パラメータ。負の振幅/周波数も許容（鏡像になるだけ）。
    time : float, default 0.0
        経過時間 [sec]。両軸の位相へ加算される。
    center : tuple[float, float] | None
        曲線の中心（論理キャンバス座標）。None でキャンバス中心。

    Returns
    -------
    CurveSamples
        `detail <= 0` のときは空。
    """
    n = int(params.detail)
    if n <= 0:
        return CurveSamples.empty()
    c = default_center() if center is None else (float(center[0]), float(center[1]))
    t = np.deg2rad(np.arange(n + 1, dtype=np.float64))
    xy = evaluate_curve(params, t, float(time), c)
    return CurveSamples(points=xy[:-1], next_points=xy[1:])


def iter_sample_pairs(
    params: CurveParameters,
    time: float = 0.0,
    *,
    center: tuple[float, float] | None = None,
) -> Iterator[tuple[Point, Point]]:
    """`sample_curve` の遅延版。1 対ずつ順に生成する。"""
    n = int(params.detail)
    c = default_center() if center is None else (float(center[0]), float(center[1]))
    prev: Point | None = None
    for i in range(n + 1):
        xy = evaluate_curve(params, np.deg2rad(np.array([float(i)])), float(time), c)[0]
        cur = (float(xy[0]), float(xy[1]))
        if prev is not None:
            yield prev, cur
        prev = cur


__all__ = [
    "CurveSamples",
    "default_center",
    "evaluate_curve",
    "sample_curve",
    "iter_sample_pairs",
]
