"""
どこで: `util.color`。
何を: 色指定の正規化（Hex, RGBA 0–1, RGBA 0–255）と背景に対する線色の自動選択。
なぜ: 設定ファイル/API/GUI で同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

from typing import Sequence

from common.types import RGBA


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        channels = [int(t[i : i + 2], 16) for i in range(0, len(t), 2)]
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = (c / 255.0 for c in channels)
    return (r, g, b, a)


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 受理: Hex 文字列, (r,g,b[,a]) （0–1 または 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[object] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        fseq = [float(v) for v in seq]  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    # 全要素が 0..1 なら 0–1 指定、それ以外は 0–255 指定とみなす
    if all(0.0 <= x <= 1.0 for x in fseq):
        if len(fseq) == 3:
            fseq.append(1.0)
        r, g, b, a = (_clamp01(x) for x in fseq)
        return (r, g, b, a)
    u8 = [max(0, min(255, int(round(x)))) for x in fseq]
    if len(u8) == 3:
        u8.append(255)
    r, g, b, a = (c / 255.0 for c in u8)
    return (r, g, b, a)


def auto_line_color(background: object) -> RGBA:
    """背景の相対輝度から黒/白の線色を選ぶ。"""
    br, bg, bb, _ = normalize_color(background)
    luminance = 0.2126 * br + 0.7152 * bg + 0.0722 * bb
    return (0.0, 0.0, 0.0, 1.0) if luminance >= 0.5 else (1.0, 1.0, 1.0, 1.0)


__all__ = [
    "parse_hex_color_str",
    "normalize_color",
    "auto_line_color",
]
