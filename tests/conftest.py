"""共通フィクスチャ。

- 乱数シード固定
- 既定パラメータ/状態の試料
- 環境変数由来の設定をテストごとに初期化
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common.settings import reload_from_env
from curves.params import AnimationClock, CurveParameters, ParameterState

_LXD_ENV = ("LXD_LOG_LEVEL", "LXD_FPS", "LXD_PATH_SUBDIVISIONS", "LXD_PARAMETER_GUI")


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def clean_lxd_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """`LXD_*` を未設定にしてから設定を読み直す（終了時も読み直す）。"""
    for name in _LXD_ENV:
        monkeypatch.delenv(name, raising=False)
    reload_from_env()
    yield
    monkeypatch.undo()
    reload_from_env()


@pytest.fixture()
def default_params() -> CurveParameters:
    return CurveParameters()


@pytest.fixture()
def small_params() -> CurveParameters:
    """低 detail で目視確認しやすい試料。"""
    return CurveParameters(
        amplitude_x=100.0,
        amplitude_y=50.0,
        frequency_x=3.0,
        frequency_y=2.0,
        detail=12,
    )


@pytest.fixture()
def default_state() -> ParameterState:
    return ParameterState(params=CurveParameters(), clock=AnimationClock())
