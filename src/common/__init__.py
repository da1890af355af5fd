"""
どこで: `common` パッケージ。
何を: 環境変数/設定/ロギング/型エイリアスなど、全層から使う軽量基盤。
なぜ: 依存の最も内側に置き、curves/engine/api の循環を避けるため。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
