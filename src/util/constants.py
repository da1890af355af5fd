"""
どこで: `util.constants`。
何を: 論理キャンバス寸法や既定色など、設定ファイルが無い場合の既定値。
"""

from __future__ import annotations

# 論理キャンバス（曲線を記述する固定解像度の仮想描画面）
DEFAULT_WORK_SIZE: tuple[float, float] = (1920.0, 1080.0)

DEFAULT_BACKGROUND = "#000000"
DEFAULT_LINE_WIDTH = 3.0
DEFAULT_FPS = 60
DEFAULT_PATH_SUBDIVISIONS = 4
DEFAULT_WINDOW_SIZE: tuple[int, int] = (1280, 720)

__all__ = [
    "DEFAULT_WORK_SIZE",
    "DEFAULT_BACKGROUND",
    "DEFAULT_LINE_WIDTH",
    "DEFAULT_FPS",
    "DEFAULT_PATH_SUBDIVISIONS",
    "DEFAULT_WINDOW_SIZE",
]
