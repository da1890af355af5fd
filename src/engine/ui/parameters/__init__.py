"""
どこで: `engine.ui.parameters` パッケージの公開入口。
何を: パラメータ記述子/更新キュー/コントローラを再輸出（Dear PyGui 実装は遅延 import）。
なぜ: GUI ライブラリ未導入の環境でも状態層だけを import できるようにするため。
"""

from .controller import ParameterController, ParameterWindowController
from .state import (
    CURVE_PARAMETERS,
    ParameterDescriptor,
    ParameterUpdateQueue,
    ParameterWindowConfig,
    RangeHint,
    get_descriptor,
)

__all__ = [
    "ParameterController",
    "ParameterWindowController",
    "CURVE_PARAMETERS",
    "ParameterDescriptor",
    "ParameterUpdateQueue",
    "ParameterWindowConfig",
    "RangeHint",
    "get_descriptor",
]
