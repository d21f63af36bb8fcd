"""
SVG rendering for tree scenes.

Produces a standalone SVG document with three layers:
- edge lines at the back
- node circles
- value labels on top
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .scene import TreeScene


@dataclass(slots=True, frozen=True)
class SvgStyle:
    node_fill: str = "#e3f2fd"
    node_stroke: str = "#1565c0"
    node_stroke_width: float = 2.0
    edge_stroke: str = "#424242"
    edge_stroke_width: float = 2.0
    text_color: str = "#000000"
    font_family: str = "Helvetica, Arial, sans-serif"
    font_size: float = 14.0


def _num(value: float) -> str:
    # Trim float noise so identical scenes serialise identically.
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_svg(scene: TreeScene, style: SvgStyle | None = None) -> str:
    style = style or SvgStyle()
    width = _num(scene.width)
    height = _num(scene.height)

    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
    ]
    title = scene.metadata.get("name")
    if title:
        parts.append(f"<title>{html.escape(str(title))}</title>")

    if scene.lines:
        parts.append(
            f'<g class="edges" stroke="{style.edge_stroke}" '
            f'stroke-width="{_num(style.edge_stroke_width)}">'
        )
        for line in scene.lines:
            parts.append(
                f'<line x1="{_num(line.x1)}" y1="{_num(line.y1)}" '
                f'x2="{_num(line.x2)}" y2="{_num(line.y2)}" />'
            )
        parts.append("</g>")

    if scene.circles:
        parts.append(
            f'<g class="nodes" fill="{style.node_fill}" stroke="{style.node_stroke}" '
            f'stroke-width="{_num(style.node_stroke_width)}">'
        )
        for circle in scene.circles:
            parts.append(
                f'<circle cx="{_num(circle.cx)}" cy="{_num(circle.cy)}" r="{_num(circle.r)}" />'
            )
        parts.append("</g>")

    if scene.labels:
        parts.append(
            f'<g class="labels" fill="{style.text_color}" '
            f'font-family="{html.escape(style.font_family)}" '
            f'font-size="{_num(style.font_size)}" text-anchor="middle" '
            f'dominant-baseline="central">'
        )
        for label in scene.labels:
            parts.append(
                f'<text x="{_num(label.x)}" y="{_num(label.y)}">{html.escape(label.text)}</text>'
            )
        parts.append("</g>")

    parts.append("</svg>")
    return "\n".join(parts)


def write_svg(scene: TreeScene, destination: Path | str, style: SvgStyle | None = None) -> Path:
    path = Path(destination).expanduser()
    path.write_text(render_svg(scene, style) + "\n", encoding="utf-8")
    return path
