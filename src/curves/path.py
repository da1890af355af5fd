"""
どこで: `curves.path`（スムーズパス構築）。
何を: サンプル対の列を、区間ごとに 1 つの制御点を持つ二次ベジェ列 `SmoothPath` へ変換し、
      ラインレンダラ向けに連続折れ線へ平坦化する。
なぜ: 低 detail の素の折れ線は角が目立つため、制御点を次サンプル寄り 2/3 に置いて
      スプライン全体を解かずに局所的に角を和らげるため。

規則（区間 i）:
- (x, y) = point_i, (nx, ny) = next_point_i
- control_i = ((x + 2·nx) / 3, (y + 2·ny) / 3)
- end_i = (nx, ny)
- パス始点は point_0。区間 i の始点は区間 i-1 の終点（= point_i）なので、途中で途切れない。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple

import numpy as np

from .sampler import CurveSamples, Point


class PathSegment(NamedTuple):
    """二次ベジェ 1 区間（始点は直前区間の終点）。"""

    control: Point
    end: Point


@dataclass(frozen=True)
class SmoothPath:
    """始点 + (制御点, 終点) 列で表す 1 本の連続パス。

    - `start`: (2,) float64。空パスでは None。
    - `controls`, `ends`: (n, 2) float64。
    """

    start: np.ndarray | None
    controls: np.ndarray
    ends: np.ndarray

    def __len__(self) -> int:
        return int(self.ends.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.start is None or self.ends.shape[0] == 0

    @classmethod
    def empty(cls) -> "SmoothPath":
        z = np.empty((0, 2), dtype=np.float64)
        return cls(start=None, controls=z, ends=z.copy())

    def segments(self) -> Iterator[PathSegment]:
        for c, e in zip(self.controls, self.ends):
            yield PathSegment((float(c[0]), float(c[1])), (float(e[0]), float(e[1])))

    def flatten(self, subdivisions: int = 4) -> np.ndarray:
        """各二次ベジェを `subdivisions` 等分で評価した連続折れ線を返す。

        Returns
        -------
        np.ndarray
            形状 (n * subdivisions + 1, 2) の float32。先頭は `start`。空パスは (0, 2)。

        例外:
            ValueError: `subdivisions < 1`。
        """
        k = int(subdivisions)
        if k < 1:
            raise ValueError(f"subdivisions must be >= 1, got {subdivisions}")
        if self.is_empty:
            return np.empty((0, 2), dtype=np.float32)
        assert self.start is not None
        # 各区間の始点 = 直前区間の終点
        p0 = np.vstack([self.start[None, :], self.ends[:-1]])
        c = self.controls
        p1 = self.ends
        s = (np.arange(1, k + 1, dtype=np.float64) / k)[None, :, None]  # (1, k, 1)
        u = 1.0 - s
        pts = (
            (u * u) * p0[:, None, :]
            + (2.0 * u * s) * c[:, None, :]
            + (s * s) * p1[:, None, :]
        )  # (n, k, 2)
        out = np.empty((pts.shape[0] * k + 1, 2), dtype=np.float32)
        out[0] = self.start
        out[1:] = pts.reshape(-1, 2)
        return out


def control_points(points: np.ndarray, next_points: np.ndarray) -> np.ndarray:
    """各区間の制御点 ((x + 2nx)/3, (y + 2ny)/3) を一括計算する。"""
    return (points + 2.0 * next_points) / 3.0


def build_smooth_path(samples: CurveSamples | Iterable[tuple[Point, Point]]) -> SmoothPath:
    """サンプル対の列から `SmoothPath` を構築する。

    `CurveSamples` はベクトル化経路で、任意の対の反復子は逐次取り込みで処理する。
    区間 i は対 i だけに依存するため、入力順がそのまま出力順になる。
    """
    if isinstance(samples, CurveSamples):
        pts, nxt = samples.points, samples.next_points
    else:
        pairs = [(tuple(p), tuple(q)) for p, q in samples]
        if not pairs:
            return SmoothPath.empty()
        pts = np.asarray([p for p, _ in pairs], dtype=np.float64)
        nxt = np.asarray([q for _, q in pairs], dtype=np.float64)
    if pts.shape[0] == 0:
        return SmoothPath.empty()
    return SmoothPath(
        start=np.array(pts[0], dtype=np.float64),
        controls=control_points(pts, nxt),
        ends=np.array(nxt, dtype=np.float64),
    )


__all__ = ["PathSegment", "SmoothPath", "control_points", "build_smooth_path"]
