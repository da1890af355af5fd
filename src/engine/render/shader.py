"""
どこで: `engine.render.shader`。
何を: 折れ線を丸キャップ/丸ジョインの太線として描く GLSL プログラムを生成する。
なぜ: ジオメトリシェーダで各線分をカプセル（両端半円の長方形）へ展開すれば、
      隣接カプセルの重なりがそのまま丸ジョインになり、CPU 側で結合形状を解かずに済むため。

uniform:
- `projection` (mat4): 論理キャンバス → クリップ空間（ビューポート変換込み）。
- `line_width` (float): 線幅（論理キャンバス単位）。
- `pixel_size` (float): 出力 1px に相当する論理単位（縁のアンチエイリアス幅）。
- `color` (vec4): 線色 RGBA。
"""

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 330
in vec2 in_vert;

void main() {
    gl_Position = vec4(in_vert, 0.0, 1.0);
}
"""

GEOMETRY_SHADER = """
#version 330
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;

uniform mat4 projection;
uniform float line_width;

flat out vec2 v_p0;
flat out vec2 v_p1;
out vec2 v_pos;

void main() {
    vec2 p0 = gl_in[0].gl_Position.xy;
    vec2 p1 = gl_in[1].gl_Position.xy;
    float r = 0.5 * line_width;
    vec2 d = p1 - p0;
    float len = length(d);
    vec2 dir = len > 1e-6 ? d / len : vec2(1.0, 0.0);
    vec2 nrm = vec2(-dir.y, dir.x);
    vec2 a = p0 - dir * r;
    vec2 b = p1 + dir * r;
    vec2 corners[4] = vec2[4](a + nrm * r, a - nrm * r, b + nrm * r, b - nrm * r);
    for (int i = 0; i < 4; ++i) {
        v_p0 = p0;
        v_p1 = p1;
        v_pos = corners[i];
        gl_Position = projection * vec4(corners[i], 0.0, 1.0);
        EmitVertex();
    }
    EndPrimitive();
}
"""

FRAGMENT_SHADER = """
#version 330
uniform vec4 color;
uniform float line_width;
uniform float pixel_size;

flat in vec2 v_p0;
flat in vec2 v_p1;
in vec2 v_pos;

out vec4 frag_color;

void main() {
    vec2 pa = v_pos - v_p0;
    vec2 ba = v_p1 - v_p0;
    float h = clamp(dot(pa, ba) / max(dot(ba, ba), 1e-12), 0.0, 1.0);
    float dist = length(pa - ba * h);
    float r = 0.5 * line_width;
    float aa = min(pixel_size, r);
    float alpha = 1.0 - smoothstep(r - aa, r, dist);
    if (alpha <= 0.0) {
        discard;
    }
    frag_color = vec4(color.rgb, color.a * alpha);
}
"""


class Shader:
    """線描画用シェーダのファクトリ。"""

    @staticmethod
    def create_shader(mgl_context: Any) -> Any:
        """ModernGL の Program を生成して返す。"""
        return mgl_context.program(
            vertex_shader=VERTEX_SHADER,
            geometry_shader=GEOMETRY_SHADER,
            fragment_shader=FRAGMENT_SHADER,
        )


__all__ = ["Shader", "VERTEX_SHADER", "GEOMETRY_SHADER", "FRAGMENT_SHADER"]
