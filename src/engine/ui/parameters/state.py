"""
どこで: `engine.ui.parameters` の状態管理層。
何を: スライダーのメタ情報 `ParameterDescriptor`（実レンジ/ラベル/見出し）と、
      コントロール面 → オーケストレーションへの更新キュー `ParameterUpdateQueue` を提供。
なぜ: GUI コールバックが曲線状態を直接書き換えず、クランプ済みの (id, 値) を積むだけにすることで、
      フレーム境界での一括適用と、GUI 無しでのテストを可能にするため。

補足:
- レンジ外の値はキューへ積む前に `ParameterDescriptor.clamp()` で丸める（コントロール面の責務）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from threading import RLock
from typing import Any, Literal

from curves.params import PARAMETER_RANGES, CurveParameters, ParameterUpdate

ValueType = Literal["float", "int"]


@dataclass(frozen=True)
class RangeHint:
    """UI 表示用かつクランプ用の範囲（実レンジ）。"""

    min_value: float | int
    max_value: float | int
    step: float | int | None = None


@dataclass(frozen=True)
class ParameterDescriptor:
    """GUI に表示するパラメータのメタ情報。"""

    id: str
    label: str
    value_type: ValueType
    default_value: float | int
    range_hint: RangeHint
    # 同じ見出しのパラメータは 1 グループにまとめて表示する
    category: str = ""
    help_text: str | None = None

    def clamp(self, value: Any) -> float | int:
        """値をレンジへ丸める（int 型は四捨五入）。非有限値は既定値に戻す。"""
        v = float(value)
        if math.isnan(v):
            v = float(self.default_value)
        lo = float(self.range_hint.min_value)
        hi = float(self.range_hint.max_value)
        v = lo if v < lo else hi if v > hi else v
        if self.value_type == "int":
            return int(round(v))
        return v


@dataclass(frozen=True)
class ParameterWindowConfig:
    width: int = 420
    height: int = 640
    title: str = "Curve Parameters"


_AMPLITUDE = "Define the width and height of the curve, respectively."
_SHAPE = "Define the shape of the curve"
_DETAIL = "Defines how many points to use for drawing the curve, or the amount of detail"
_PHASE = "Mostly inconsequential, just here for the sake of completeness"


def _descriptor(
    pid: str, label: str, category: str, *, help_text: str | None = None
) -> ParameterDescriptor:
    lo, hi = PARAMETER_RANGES[pid]
    is_int = pid == "detail"
    return ParameterDescriptor(
        id=pid,
        label=label,
        value_type="int" if is_int else "float",
        default_value=getattr(CurveParameters(), pid),
        range_hint=RangeHint(lo, hi, 1 if is_int else None),
        category=category,
        help_text=help_text,
    )


# 表示順 = 登録順
CURVE_PARAMETERS: tuple[ParameterDescriptor, ...] = (
    _descriptor("amplitude_x", "X-axis amplitude", _AMPLITUDE),
    _descriptor("amplitude_y", "Y-axis amplitude", _AMPLITUDE),
    _descriptor("frequency_x", "X-axis frequency", _SHAPE),
    _descriptor("frequency_y", "Y-axis frequency", _SHAPE),
    _descriptor(
        "detail",
        "Detail level",
        _DETAIL,
        help_text="High values add little beyond a few thousand and only slow the frame down.",
    ),
    _descriptor("phase_x", "X-axis phase shift", _PHASE),
    _descriptor("phase_y", "Y-axis phase shift", _PHASE),
)


def get_descriptor(pid: str) -> ParameterDescriptor:
    """id から記述子を取得する。

    例外:
        KeyError: 未登録の id。
    """
    for d in CURVE_PARAMETERS:
        if d.id == pid:
            return d
    raise KeyError(pid)


class ParameterUpdateQueue:
    """コントロール面が積み、オーケストレーションがフレームごとに取り出す更新列。

    GUI ドライバがスレッド駆動になる場合に備えてロックで保護する。
    """

    def __init__(self) -> None:
        self._pending: list[ParameterUpdate] = []
        self._lock = RLock()

    def push(self, pid: str, value: Any) -> ParameterUpdate:
        """値をクランプしてから積む。積んだ更新を返す。"""
        desc = get_descriptor(pid)
        update = ParameterUpdate(pid, desc.clamp(value))
        with self._lock:
            self._pending.append(update)
        return update

    def drain(self) -> list[ParameterUpdate]:
        """積まれた更新を到着順に取り出して空にする。"""
        with self._lock:
            out, self._pending = self._pending, []
        return out

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)


__all__ = [
    "RangeHint",
    "ParameterDescriptor",
    "ParameterWindowConfig",
    "CURVE_PARAMETERS",
    "get_descriptor",
    "ParameterUpdateQueue",
]
