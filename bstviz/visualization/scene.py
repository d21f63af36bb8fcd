from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger

from bstviz.trees.snapshot import TreeSnapshot

from .layout import LayoutConfig, PositionedNode, compute_tree_layout


@dataclass(slots=True, frozen=True)
class Circle:
    """A node disc centred on its laid-out position."""

    cx: float
    cy: float
    r: float
    key: Any
    depth: int = 0


@dataclass(slots=True, frozen=True)
class Label:
    """Text centred on a node, showing its value."""

    x: float
    y: float
    text: str
    key: Any


@dataclass(slots=True, frozen=True)
class Line:
    """An edge from the bottom of a parent disc to the top of a child disc."""

    x1: float
    y1: float
    x2: float
    y2: float
    child_key: Any


Primitive = Union[Circle, Label, Line]


@dataclass(slots=True, frozen=True)
class TreeScene:
    """Drawable primitives for one tree plus the canvas size they fit in."""

    circles: Tuple[Circle, ...]
    labels: Tuple[Label, ...]
    lines: Tuple[Line, ...]
    width: float
    height: float
    positions: Tuple[PositionedNode, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_empty(self) -> bool:
        return not self.circles

    @property
    def primitives(self) -> Iterator[Primitive]:
        yield from self.lines
        yield from self.circles
        yield from self.labels

    def content_bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """Return ``(min_x, min_y, max_x, max_y)`` covered by node discs."""

        if not self.circles:
            return None
        centers = np.array([(c.cx, c.cy) for c in self.circles], dtype=float)
        radii = np.array([c.r for c in self.circles], dtype=float)
        low = (centers - radii[:, None]).min(axis=0)
        high = (centers + radii[:, None]).max(axis=0)
        return float(low[0]), float(low[1]), float(high[0]), float(high[1])


def build_tree_scene(
    snapshot: TreeSnapshot,
    viewport_width: float,
    config: Optional[LayoutConfig] = None,
    positions: Optional[Sequence[PositionedNode]] = None,
) -> TreeScene:
    """Construct a :class:`TreeScene` for ``snapshot`` sized to its depth."""

    config = config or LayoutConfig()
    if positions is None:
        positions = compute_tree_layout(snapshot, viewport_width, config)

    radius = config.node_radius
    circles = []
    labels = []
    lines = []
    deepest = -1
    for placed in positions:
        key = placed.key
        deepest = max(deepest, placed.depth)
        circles.append(Circle(placed.x, placed.y, radius, key, placed.depth))
        labels.append(Label(placed.x, placed.y, str(placed.node.value), key))
        if placed.has_parent:
            lines.append(
                Line(
                    placed.parent_x,
                    placed.parent_y + radius,
                    placed.x,
                    placed.y - radius,
                    key,
                )
            )

    height = max(snapshot.height, deepest)
    if deepest > snapshot.height:
        logger.warning(
            "Tree {} reports height {} but is laid out {} levels deep",
            snapshot.id,
            snapshot.height,
            deepest,
        )
    metadata = {
        "id": snapshot.id,
        "name": snapshot.name,
        "node_count": snapshot.node_count,
        "height": snapshot.height,
        "is_balanced": snapshot.is_balanced,
    }
    scene = TreeScene(
        circles=tuple(circles),
        labels=tuple(labels),
        lines=tuple(lines),
        width=float(viewport_width),
        height=config.canvas_height(height),
        positions=tuple(positions),
        metadata=MappingProxyType(metadata),
    )
    logger.debug(
        "Laid out {} nodes on a {}x{} canvas", len(circles), scene.width, scene.height
    )
    return scene


def fit_transform(
    scene: TreeScene, width: float, height: float, margin: float = 0.0
) -> Tuple[float, float, float]:
    """Return ``(scale, dx, dy)`` mapping scene coordinates into a window.

    The scale is uniform so discs stay round; the scene canvas is centred in
    the available area.
    """

    avail_w = max(width - 2 * margin, 1.0)
    avail_h = max(height - 2 * margin, 1.0)
    scale = min(avail_w / scene.width, avail_h / scene.height)
    dx = margin + (avail_w - scene.width * scale) / 2.0
    dy = margin + (avail_h - scene.height * scale) / 2.0
    return scale, dx, dy
