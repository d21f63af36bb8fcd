"""Layout and rendering of binary tree snapshots."""

from .layout import LayoutConfig, MalformedTreeError, PositionedNode, compute_tree_layout
from .scene import Circle, Label, Line, TreeScene, build_tree_scene, fit_transform
from .svg import SvgStyle, render_svg, write_svg

__all__ = [
    "Circle",
    "Label",
    "LayoutConfig",
    "Line",
    "MalformedTreeError",
    "PositionedNode",
    "SvgStyle",
    "TreeScene",
    "build_tree_scene",
    "compute_tree_layout",
    "fit_transform",
    "render_svg",
    "write_svg",
]
