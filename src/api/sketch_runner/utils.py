"""
どこで: `api.sketch_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS/論理キャンバス/分割数/色/初期パラメータなど、起動設定の解決を提供。
なぜ: `api.visualizer` を薄く保ち、テスト容易性と再利用性を上げるため。

優先順位（共通）: 明示引数 > 環境変数（`common.settings`） > YAML 設定 > 既定値。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.settings import get as get_settings
from common.types import RGBA
from curves.params import CurveParameters, sanitize_parameters
from engine.ui.parameters.state import get_descriptor
from util.color import auto_line_color, normalize_color
from util.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_FPS,
    DEFAULT_LINE_WIDTH,
    DEFAULT_PATH_SUBDIVISIONS,
    DEFAULT_WINDOW_SIZE,
    DEFAULT_WORK_SIZE,
)
from util.utils import config_section

logger = logging.getLogger(__name__)


def _positive_int(value: Any, default: int) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return max(1, int(default))


def resolve_fps(requested_fps: int | None, cfg: Mapping[str, Any] | None = None) -> int:
    """FPS を解決して 1 以上の int を返す。数値化できない値は既定へ。"""
    if requested_fps is not None:
        return _positive_int(requested_fps, DEFAULT_FPS)
    env_fps = get_settings().FPS
    if env_fps is not None:
        return _positive_int(env_fps, DEFAULT_FPS)
    ccfg = config_section(cfg, "canvas_controller")
    return _positive_int(ccfg.get("fps", DEFAULT_FPS), DEFAULT_FPS)


def resolve_work_size(
    requested: tuple[float, float] | None, cfg: Mapping[str, Any] | None = None
) -> tuple[float, float]:
    """論理キャンバスサイズを解決する。

    - 明示指定が不正（正でない/2 要素でない）なら `ValueError`。
    - 設定ファイル側の不正値は警告して既定値へ。
    """
    if requested is not None:
        try:
            w, h = float(requested[0]), float(requested[1])
        except (TypeError, ValueError, IndexError) as e:
            raise ValueError(f"invalid work_size: {requested!r}") from e
        if w <= 0 or h <= 0:
            raise ValueError(f"work_size must be positive, got: {(w, h)}")
        return w, h
    raw = config_section(cfg, "canvas").get("work_size")
    if raw is None:
        return DEFAULT_WORK_SIZE
    try:
        w, h = float(raw[0]), float(raw[1])
        if w > 0 and h > 0:
            return w, h
    except (TypeError, ValueError, IndexError, KeyError):
        pass
    logger.warning("invalid canvas.work_size in config: %r; using %r", raw, DEFAULT_WORK_SIZE)
    return DEFAULT_WORK_SIZE


def resolve_subdivisions(requested: int | None, cfg: Mapping[str, Any] | None = None) -> int:
    """二次ベジェ 1 区間あたりの平坦化分割数（1 以上）。"""
    if requested is not None:
        return _positive_int(requested, DEFAULT_PATH_SUBDIVISIONS)
    env_val = get_settings().PATH_SUBDIVISIONS
    if env_val is not None:
        return _positive_int(env_val, DEFAULT_PATH_SUBDIVISIONS)
    pcfg = config_section(cfg, "path")
    raw = pcfg.get("subdivisions", DEFAULT_PATH_SUBDIVISIONS)
    return _positive_int(raw, DEFAULT_PATH_SUBDIVISIONS)


def resolve_use_parameter_gui(requested: bool | None, cfg: Mapping[str, Any] | None = None) -> bool:
    if requested is not None:
        return bool(requested)
    env_val = get_settings().PARAMETER_GUI
    if env_val is not None:
        return bool(env_val)
    return bool(config_section(cfg, "parameter_gui").get("enabled", True))


def resolve_line_width(requested: float | None, cfg: Mapping[str, Any] | None = None) -> float:
    """線幅（論理キャンバス単位）。0 以下/不正値は既定へ。"""
    raw = requested if requested is not None else config_section(cfg, "canvas").get("line_width")
    try:
        v = float(raw) if raw is not None else DEFAULT_LINE_WIDTH
    except (TypeError, ValueError):
        v = DEFAULT_LINE_WIDTH
    return v if v > 0 else DEFAULT_LINE_WIDTH


def resolve_colors(
    background: Any, line_color: Any, cfg: Mapping[str, Any] | None = None
) -> tuple[RGBA, RGBA]:
    """背景色と線色を決定する（明示 → 設定 → 背景輝度からの自動選択）。"""
    canvas_cfg = config_section(cfg, "canvas")
    bg_src = background if background is not None else canvas_cfg.get("background_color")
    try:
        bg_rgba = normalize_color(bg_src if bg_src is not None else DEFAULT_BACKGROUND)
    except ValueError:
        if background is not None:
            raise
        logger.warning("invalid canvas.background_color: %r", bg_src)
        bg_rgba = normalize_color(DEFAULT_BACKGROUND)

    lc_src = line_color if line_color is not None else canvas_cfg.get("line_color")
    if lc_src is None:
        return bg_rgba, auto_line_color(bg_rgba)
    try:
        return bg_rgba, normalize_color(lc_src)
    except ValueError:
        if line_color is not None:
            raise
        logger.warning("invalid canvas.line_color: %r", lc_src)
        return bg_rgba, auto_line_color(bg_rgba)


def resolve_window_size(cfg: Mapping[str, Any] | None = None) -> tuple[int, int]:
    wcfg = config_section(cfg, "window")
    w = _positive_int(wcfg.get("width", DEFAULT_WINDOW_SIZE[0]), DEFAULT_WINDOW_SIZE[0])
    h = _positive_int(wcfg.get("height", DEFAULT_WINDOW_SIZE[1]), DEFAULT_WINDOW_SIZE[1])
    return w, h


def _clamp_detail(params: CurveParameters) -> CurveParameters:
    """detail をコントロール面と同じレンジ [0, 5000] へ丸める。"""
    detail = get_descriptor("detail").clamp(params.detail)
    if detail == params.detail:
        return params
    logger.warning("curve detail %r out of range; clamped to %d", params.detail, detail)
    return params.replace_values({"detail": detail})


def resolve_initial_parameters(
    requested: CurveParameters | None, cfg: Mapping[str, Any] | None = None
) -> CurveParameters:
    """初期パラメータ（明示 → 設定 `curve` → 既定）。

    不正値は修復し、detail はスライダーと同じレンジへ丸めて返す
    （設定ファイルや CLI から巨大な detail が直接入るのを防ぐ）。
    """
    if requested is not None:
        return _clamp_detail(sanitize_parameters(requested))
    curve_cfg = config_section(cfg, "curve")
    try:
        params = CurveParameters.from_mapping(curve_cfg)
    except (TypeError, ValueError) as e:
        logger.warning("invalid curve section in config: %s; using defaults", e)
        params = CurveParameters()
    return _clamp_detail(sanitize_parameters(params))


__all__ = [
    "resolve_fps",
    "resolve_work_size",
    "resolve_subdivisions",
    "resolve_use_parameter_gui",
    "resolve_line_width",
    "resolve_colors",
    "resolve_window_size",
    "resolve_initial_parameters",
]
