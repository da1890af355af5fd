"""
どこで: `api` パッケージ（公開入口）。
何を: ビジュアライザの起動関数と 1 フレーム計算を再輸出する。
"""

from .pipeline import FrameData, build_frame
from .visualizer import run_visualizer

__all__ = ["FrameData", "build_frame", "run_visualizer"]
