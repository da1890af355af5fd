"""
どこで: `curves.params`（パラメータ状態層）。
何を: 曲線パラメータ `CurveParameters`、アニメーション時計 `AnimationClock`、
      両者を所有する `ParameterState` と、検証/修復ヘルパを提供。
なぜ: UI からの更新を「(id, 値) の列」として受け取り、フレーム境界でまとめて適用することで、
      サンプラ/パスビルダを純関数のまま保つため。

不変条件:
- `CurveParameters` は不変（frozen）。更新は常に新インスタンスへの差し替えで行う。
- `AnimationClock.elapsed` は単調非減少。
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field, fields, replace
from typing import Any, Iterable, Mapping, NamedTuple

logger = logging.getLogger(__name__)


class InvalidParameter(ValueError):
    """非有限の振幅/周波数/位相、または負の detail を検出したときに送出する。"""


# コントロール面の想定レンジ（非有限値の修復先として使う）
PARAMETER_RANGES: dict[str, tuple[float, float]] = {
    "amplitude_x": (0.0, 1000.0),
    "amplitude_y": (0.0, 1000.0),
    "frequency_x": (0.0, 100.0),
    "frequency_y": (0.0, 100.0),
    "phase_x": (0.0, 100.0),
    "phase_y": (0.0, 100.0),
    "detail": (0, 5000),
}


@dataclass(frozen=True)
class CurveParameters:
    """和-正弦（リサージュ）曲線のパラメータ。

    Attributes
    ----------
    amplitude_x, amplitude_y : float
        各軸の振幅（論理キャンバス単位）。
    frequency_x, frequency_y : float
        各軸の周波数。
    phase_x, phase_y : float
        各軸の位相 [rad]。経過時間が加算されてアニメーションする。
    detail : int
        サンプル数。角度は 1 サンプルにつき 1 度進む。
    """

    amplitude_x: float = 610.0
    amplitude_y: float = 580.0
    frequency_x: float = 52.0
    frequency_y: float = 51.0
    phase_x: float = 0.0
    phase_y: float = 0.0
    detail: int = 500

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "CurveParameters":
        """設定辞書から生成する。未知キーは無視し、欠損キーは既定値。"""
        base = cls()
        if not values:
            return base
        known = {k: v for k, v in values.items() if k in cls.field_names()}
        return base.replace_values(known)

    def replace_values(self, values: Mapping[str, Any]) -> "CurveParameters":
        """指定フィールドを差し替えた新インスタンスを返す。

        例外:
            KeyError: 未知のパラメータ id を含む場合。
        """
        names = self.field_names()
        coerced: dict[str, Any] = {}
        for key, value in values.items():
            if key not in names:
                raise KeyError(f"unknown curve parameter: {key!r}")
            coerced[key] = _coerce(key, value)
        return replace(self, **coerced)

    def as_dict(self) -> dict[str, float | int]:
        return {name: getattr(self, name) for name in self.field_names()}


def _coerce(name: str, value: Any) -> float | int:
    if name == "detail":
        v = float(value)
        # 非有限の detail は int 化できないため、そのまま検証/修復に回す
        return int(v) if math.isfinite(v) else v  # type: ignore[return-value]
    return float(value)


def validate_parameters(params: CurveParameters) -> None:
    """信頼できない入力由来のパラメータを検証する。

    例外:
        InvalidParameter: 非有限の実数値、または負/非整数の detail。
    """
    for name in params.field_names():
        value = getattr(params, name)
        if name == "detail":
            if not isinstance(value, numbers.Integral) or value < 0:
                raise InvalidParameter(f"detail must be a non-negative integer, got {value!r}")
            continue
        if not math.isfinite(value):
            raise InvalidParameter(f"{name} must be finite, got {value!r}")


def sanitize_parameters(params: CurveParameters) -> CurveParameters:
    """不正値を最寄りの有効値へ丸めた `CurveParameters` を返す（例外を送出しない）。

    - `+inf` → レンジ上限、`-inf` → レンジ下限、`nan` → 既定値。
    - 負の detail → 0、非有限の detail は上記と同じ規則。
    - 修復した項目は WARNING でログに残す。
    """
    defaults = CurveParameters()
    fixes: dict[str, float | int] = {}
    for name in params.field_names():
        value = getattr(params, name)
        lo, hi = PARAMETER_RANGES[name]
        fixed: float | int | None = None
        if isinstance(value, float) and math.isnan(value):
            fixed = getattr(defaults, name)
        elif isinstance(value, float) and math.isinf(value):
            fixed = hi if value > 0 else lo
        elif name == "detail" and value < 0:
            fixed = 0
        if fixed is not None:
            logger.warning("invalid curve parameter %s=%r; clamped to %r", name, value, fixed)
            fixes[name] = int(fixed) if name == "detail" else float(fixed)
    if not fixes:
        return params
    return replace(params, **fixes)


class AnimationClock:
    """経過時間 `elapsed` [sec] を保持する単調非減少の時計（Tickable）。"""

    def __init__(self, elapsed: float = 0.0) -> None:
        self._elapsed = max(0.0, float(elapsed))

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def tick(self, dt: float) -> None:
        """`dt` 秒だけ進める。負の dt は 0 とみなす。"""
        if dt > 0.0 and math.isfinite(dt):
            self._elapsed += float(dt)

    def set_elapsed(self, value: float) -> None:
        """外部タイマの絶対値を取り込む。過去へは戻さない。"""
        v = float(value)
        if math.isfinite(v) and v > self._elapsed:
            self._elapsed = v


class ParameterUpdate(NamedTuple):
    """コントロール面から届く 1 件の更新（パラメータ id と新しい値）。"""

    id: str
    value: float


@dataclass
class ParameterState:
    """オーケストレーション層が所有する唯一の可変状態。"""

    params: CurveParameters = field(default_factory=CurveParameters)
    clock: AnimationClock = field(default_factory=AnimationClock)

    @property
    def time(self) -> float:
        return self.clock.elapsed

    def apply_updates(self, updates: Iterable[ParameterUpdate]) -> list[str]:
        """更新を順に適用し、実際に値が変わった id を返す。

        未知の id はログに残して読み飛ばす（1 件の不正更新でフレームを止めない）。
        """
        pending: dict[str, Any] = {}
        for upd in updates:
            if upd.id not in CurveParameters.field_names():
                logger.warning("ignoring update for unknown parameter %r", upd.id)
                continue
            pending[upd.id] = upd.value
        if not pending:
            return []
        new_params = sanitize_parameters(self.params.replace_values(pending))
        changed = [
            name for name in pending if getattr(new_params, name) != getattr(self.params, name)
        ]
        self.params = new_params
        if changed:
            logger.debug("curve parameters changed: %s", ", ".join(changed))
        return changed

    def effective_phases(self) -> tuple[float, float]:
        """経過時間を加算した実効位相 (phase_x + t, phase_y + t)。"""
        t = self.clock.elapsed
        return self.params.phase_x + t, self.params.phase_y + t


__all__ = [
    "InvalidParameter",
    "PARAMETER_RANGES",
    "CurveParameters",
    "validate_parameters",
    "sanitize_parameters",
    "AnimationClock",
    "ParameterUpdate",
    "ParameterState",
]
