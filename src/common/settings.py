"""
どこで: `common.settings`
何を: `LXD_*` 環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: YAML 設定より優先される上書き値を 1 箇所に集約し、テストで差し替えやすくするため。

環境変数:
- `LXD_LOG_LEVEL`: ロギングレベル（DEBUG/INFO/...）。
- `LXD_FPS`: 更新レート（1 以上）。
- `LXD_PATH_SUBDIVISIONS`: 二次ベジェ 1 区間あたりの折れ線分割数（1 以上）。
- `LXD_PARAMETER_GUI`: パラメータ GUI の有効/無効。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # None は「未指定（YAML/既定に従う）」を表す
    LOG_LEVEL: str | None = None
    FPS: int | None = None
    PATH_SUBDIVISIONS: int | None = None
    PARAMETER_GUI: bool | None = None


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 数値は下限丸め（`min_value=1`）を適用する。
    - 不正値は未指定（None）として扱う。
    """
    level = env_str("LXD_LOG_LEVEL")
    _settings.LOG_LEVEL = level.upper() if level is not None else None
    _settings.FPS = env_int("LXD_FPS", None, min_value=1)
    _settings.PATH_SUBDIVISIONS = env_int("LXD_PATH_SUBDIVISIONS", None, min_value=1)
    _settings.PARAMETER_GUI = env_bool("LXD_PARAMETER_GUI", None)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
