"""
どこで: `curves` パッケージ（ドメイン層）。
何を: パラメータ状態・曲線サンプラ・スムーズパスビルダを提供する。
なぜ: 描画バックエンドに依存しない純粋な計算をまとめ、単体でテスト可能にするため。
"""

from .params import (
    AnimationClock,
    CurveParameters,
    InvalidParameter,
    ParameterState,
    ParameterUpdate,
    sanitize_parameters,
    validate_parameters,
)
from .path import PathSegment, SmoothPath, build_smooth_path
from .sampler import CurveSamples, iter_sample_pairs, sample_curve

__all__ = [
    "AnimationClock",
    "CurveParameters",
    "InvalidParameter",
    "ParameterState",
    "ParameterUpdate",
    "sanitize_parameters",
    "validate_parameters",
    "PathSegment",
    "SmoothPath",
    "build_smooth_path",
    "CurveSamples",
    "iter_sample_pairs",
    "sample_curve",
]
