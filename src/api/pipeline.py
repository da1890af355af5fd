"""
どこで: `api.pipeline`（1 フレーム分の純粋な計算経路）。
何を: パラメータ状態 → サンプリング → スムーズパス → 平坦化、とビューポート計算をまとめ、
      描画に必要なデータ `FrameData` を返す。
なぜ: 描画バックエンド無しで 1 フレームの結果を検証でき、不正フレームを「描かない」に落とせるようにするため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from curves.params import ParameterState, sanitize_parameters
from curves.path import SmoothPath, build_smooth_path
from curves.sampler import default_center, sample_curve
from engine.core.viewport import DegenerateViewport, ViewportTransform, compute_viewport
from util.constants import DEFAULT_PATH_SUBDIVISIONS, DEFAULT_WORK_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameData:
    """1 フレームの描画入力。"""

    path: SmoothPath
    polyline: np.ndarray
    viewport: ViewportTransform


def build_frame(
    state: ParameterState,
    out_size: tuple[float, float],
    *,
    work_size: tuple[float, float] = DEFAULT_WORK_SIZE,
    subdivisions: int = DEFAULT_PATH_SUBDIVISIONS,
) -> FrameData | None:
    """現在の状態から 1 フレーム分の描画データを作る。

    Returns
    -------
    FrameData | None
        出力サイズが退化している、または detail が 0 でパスが空のときは None（そのフレームは描かない）。
    """
    try:
        viewport = compute_viewport(work_size, out_size)
    except DegenerateViewport as e:
        logger.debug("skipping frame: %s", e)
        return None

    params = sanitize_parameters(state.params)
    samples = sample_curve(params, state.time, center=default_center(work_size))
    path = build_smooth_path(samples)
    if path.is_empty:
        return None
    return FrameData(path=path, polyline=path.flatten(subdivisions), viewport=viewport)


__all__ = ["FrameData", "build_frame"]
