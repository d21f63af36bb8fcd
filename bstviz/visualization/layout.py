from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Tuple

from bstviz.trees.snapshot import TreeNode, TreeSnapshot


class MalformedTreeError(ValueError):
    """The node graph is deeper than its node count allows, e.g. it has a cycle."""


@dataclass(slots=True, frozen=True)
class LayoutConfig:
    """Geometry used when placing tree nodes on screen."""

    node_radius: float = 20.0
    level_spacing: float = 70.0
    top_margin: float = 40.0
    bottom_margin: float = 40.0
    decay: float = 1.0
    min_height: float = 300.0
    # Level number of the root in the halving formula.
    level_base: int = 1

    def __post_init__(self) -> None:
        for name in ("node_radius", "level_spacing", "min_height"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("top_margin", "bottom_margin"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.level_base < 0:
            raise ValueError(f"level_base must be non-negative, got {self.level_base}")
        if not 0.0 < self.decay <= 1.0:
            raise ValueError(f"decay must lie in (0, 1], got {self.decay}")

    def offset(self, viewport_width: float, depth: int) -> float:
        """Horizontal distance from a node at ``depth`` to each of its children."""

        # ldexp underflows to zero instead of overflowing on very deep chains.
        return math.ldexp(viewport_width, -(depth + self.level_base + 1)) * self.decay ** depth

    def canvas_height(self, height: int) -> float:
        return max(self.min_height, (height + 1) * self.level_spacing + self.bottom_margin)


@dataclass(slots=True, frozen=True)
class PositionedNode:
    """A tree node together with its screen position."""

    node: TreeNode
    x: float
    y: float
    depth: int
    parent_x: float | None = None
    parent_y: float | None = None
    # Pre-order index of the parent within the same layout.
    parent_index: int | None = None

    @property
    def key(self) -> Any:
        if self.node.id is not None:
            return self.node.id
        return (self.node.value, self.x, self.y)

    @property
    def has_parent(self) -> bool:
        return self.parent_index is not None


def compute_tree_layout(
    snapshot: TreeSnapshot,
    viewport_width: float,
    config: LayoutConfig | None = None,
) -> Tuple[PositionedNode, ...]:
    """Place every node of ``snapshot`` for drawing top-down.

    The root sits at the horizontal centre of the viewport. A node at depth
    ``d`` places its children ``viewport_width / 2**(d + level_base + 1)`` to
    either side, so with the default ``level_base`` of 1 the ``2**d`` slots of
    depth ``d`` share exactly ``viewport_width`` and sibling subtrees never
    overlap: the root's children sit at ``viewport_width / 4`` and
    ``3 * viewport_width / 4``. Pass ``LayoutConfig(level_base=0)`` for the
    literal ``viewport_width / 2**(d + 1)`` halving, which puts the root's
    children on the canvas edges. ``config.decay`` shrinks the distance
    further by ``decay**d``. Nodes are returned in pre-order.
    """

    if not viewport_width > 0 or not math.isfinite(viewport_width):
        raise ValueError(f"viewport_width must be a positive number, got {viewport_width}")
    config = config or LayoutConfig()
    if snapshot.root_node is None:
        return ()

    max_depth = max(2 * snapshot.node_count, 1)
    positioned: List[PositionedNode] = []
    stack: List[Tuple[TreeNode, float, float, int, int | None]] = [
        (snapshot.root_node, viewport_width / 2.0, config.top_margin, 0, None)
    ]
    while stack:
        node, x, y, depth, parent_index = stack.pop()
        if depth > max_depth:
            raise MalformedTreeError(
                f"Node {node.value!r} sits at depth {depth}, beyond the bound of "
                f"{max_depth} for {snapshot.node_count} nodes"
            )
        parent = positioned[parent_index] if parent_index is not None else None
        positioned.append(
            PositionedNode(
                node,
                x,
                y,
                depth,
                parent.x if parent is not None else None,
                parent.y if parent is not None else None,
                parent_index,
            )
        )

        index = len(positioned) - 1
        offset = config.offset(viewport_width, depth)
        child_y = y + config.level_spacing
        if node.right is not None:
            stack.append((node.right, x + offset, child_y, depth + 1, index))
        if node.left is not None:
            stack.append((node.left, x - offset, child_y, depth + 1, index))
    return tuple(positioned)
