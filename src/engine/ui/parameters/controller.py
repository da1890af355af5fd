"""
どこで: `engine.ui.parameters` 層の適用/ウィンドウ制御。
何を: 更新キューを毎フレーム `ParameterState` へ適用する `ParameterController` と、
      ParameterWindow の生成/同期/終了を司る `ParameterWindowController`。
なぜ: ウィンドウ寿命管理と状態更新を分離し、GUI 有無に依らず同じ経路で値を反映するため。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from curves.params import ParameterState

from .state import ParameterUpdateQueue, ParameterWindowConfig

logger = logging.getLogger(__name__)


class ParameterController:
    """キューに積まれた更新をフレーム境界で状態へ反映する Tickable。"""

    def __init__(
        self,
        state: ParameterState,
        queue: ParameterUpdateQueue,
        *,
        on_change: Callable[[Iterable[str]], None] | None = None,
    ) -> None:
        self._state = state
        self._queue = queue
        self._on_change = on_change

    def tick(self, dt: float) -> None:
        updates = self._queue.drain()
        if not updates:
            return
        changed = self._state.apply_updates(updates)
        if changed and self._on_change is not None:
            self._on_change(changed)


class ParameterWindowController:
    """ParameterWindow のライフサイクルを管理する。"""

    def __init__(
        self,
        state: ParameterState,
        queue: ParameterUpdateQueue,
        *,
        window_cfg: ParameterWindowConfig | None = None,
    ) -> None:
        self._state = state
        self._queue = queue
        self._window_cfg = window_cfg or ParameterWindowConfig()
        self._window: Any | None = None

    def start(self) -> None:
        if self._window is None:
            # 遅延 import（Dear PyGui 依存を実行時に限定）
            from .dpg_window import ParameterWindow

            self._window = ParameterWindow(
                queue=self._queue,
                initial=self._state.params.as_dict(),
                width=self._window_cfg.width,
                height=self._window_cfg.height,
                title=self._window_cfg.title,
            )
            logger.debug("parameter window started")

    def sync(self, changed: Iterable[str]) -> None:
        """適用後の値（修復済み）をスライダー表示へ戻す。"""
        if self._window is None:
            return
        for pid in changed:
            self._window.set_value(pid, getattr(self._state.params, pid))

    def shutdown(self) -> None:
        if self._window is not None:
            self._window.close()
            self._window = None

    @property
    def window(self) -> Any | None:
        return self._window


__all__ = ["ParameterController", "ParameterWindowController"]
