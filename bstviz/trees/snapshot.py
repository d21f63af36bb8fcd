from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, Mapping, Tuple

import orjson
from loguru import logger

from .errors import SnapshotFormatError

EMPTY_HEIGHT = -1


@dataclass(slots=True, frozen=True)
class TreeNode:
    """A node of a server-built binary search tree."""

    value: int
    left: TreeNode | None = None
    right: TreeNode | None = None
    id: Any = None

    def children(self) -> Tuple[TreeNode, ...]:
        return tuple(child for child in (self.left, self.right) if child is not None)


@dataclass(slots=True, frozen=True)
class TreeSnapshot:
    """A tree as reported by the tree service, plus its listing metadata."""

    root_node: TreeNode | None
    node_count: int
    height: int
    is_balanced: bool | None = None
    original_inputs: Tuple[int, ...] = ()
    id: Any = None
    name: str | None = None
    created_at: datetime | str | None = None

    @property
    def is_empty(self) -> bool:
        return self.root_node is None

    def iter_preorder(self) -> Iterator[TreeNode]:
        """Depth-first, left-before-right traversal starting at the root."""

        stack = [self.root_node] if self.root_node is not None else []
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def count_nodes(self) -> int:
        return sum(1 for _ in self.iter_preorder())

    def measure_height(self) -> int:
        if self.root_node is None:
            return EMPTY_HEIGHT
        deepest = 0
        stack = [(self.root_node, 0)]
        while stack:
            node, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in node.children())
        return deepest

    def to_dict(self) -> dict[str, Any]:
        """Return the snapshot in the service's camelCase wire shape."""

        created = self.created_at
        if isinstance(created, datetime):
            created = created.isoformat()
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": created,
            "originalInputs": list(self.original_inputs),
            "nodeCount": self.node_count,
            "height": self.height,
            "isBalanced": self.is_balanced,
            "rootNode": _node_to_dict(self.root_node, simplified=False),
        }

    def simplified(self) -> dict[str, Any]:
        """Return the structural fields only, with value/left/right per node."""

        return {
            "nodeCount": self.node_count,
            "height": self.height,
            "isBalanced": self.is_balanced,
            "rootNode": _node_to_dict(self.root_node, simplified=True),
        }


def _node_to_dict(root: TreeNode | None, *, simplified: bool) -> dict[str, Any] | None:
    if root is None:
        return None

    def convert(node: TreeNode) -> dict[str, Any]:
        entry: dict[str, Any] = {"value": node.value, "left": None, "right": None}
        if node.id is not None and not simplified:
            entry["id"] = node.id
        return entry

    result = convert(root)
    stack = [(root, result)]
    while stack:
        node, entry = stack.pop()
        for side in ("left", "right"):
            child = getattr(node, side)
            if child is not None:
                child_entry = convert(child)
                entry[side] = child_entry
                stack.append((child, child_entry))
    return result


def _parse_int(raw: Any, field: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise SnapshotFormatError(f"Expected integer {field}, got {raw!r}")
    return raw


def _parse_node(raw: Any) -> TreeNode | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise SnapshotFormatError(f"Expected tree node object, got {type(raw).__name__}")

    # Children are built before their parents since nodes are immutable.
    order: list[Mapping[str, Any]] = []
    stack = [raw]
    while stack:
        entry = stack.pop()
        if not isinstance(entry, Mapping):
            raise SnapshotFormatError(
                f"Expected tree node object, got {type(entry).__name__}"
            )
        if "value" not in entry:
            raise SnapshotFormatError("Tree node is missing its value")
        order.append(entry)
        for side in ("left", "right"):
            if entry.get(side) is not None:
                stack.append(entry[side])

    built: dict[int, TreeNode] = {}
    for entry in reversed(order):
        left = entry.get("left")
        right = entry.get("right")
        built[id(entry)] = TreeNode(
            value=_parse_int(entry["value"], "node value"),
            left=built[id(left)] if left is not None else None,
            right=built[id(right)] if right is not None else None,
            id=entry.get("id"),
        )
    return built[id(raw)]


def _parse_created_at(raw: Any) -> datetime | str | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return raw
    raise SnapshotFormatError(f"Expected ISO-8601 createdAt, got {raw!r}")


def parse_snapshot(payload: Mapping[str, Any], *, strict: bool = True) -> TreeSnapshot:
    """Build a :class:`TreeSnapshot` from the service's JSON payload.

    An empty tree may be reported with height ``0`` or ``-1``; both are
    normalised to ``-1``. With ``strict`` a node count or height that
    disagrees with the node graph raises :class:`SnapshotFormatError`,
    otherwise the mismatch is logged and the values measured from the node
    graph are used, so the layout depth bound always matches the tree.
    """

    if not isinstance(payload, Mapping):
        raise SnapshotFormatError(f"Expected snapshot object, got {type(payload).__name__}")

    root = _parse_node(payload.get("rootNode"))
    probe = TreeSnapshot(root_node=root, node_count=0, height=EMPTY_HEIGHT)
    actual_count = probe.count_nodes()
    actual_height = probe.measure_height()

    raw_count = payload.get("nodeCount")
    node_count = actual_count if raw_count is None else _parse_int(raw_count, "nodeCount")
    if node_count < 0:
        raise SnapshotFormatError(f"nodeCount must be non-negative, got {node_count}")

    raw_height = payload.get("height")
    height = actual_height if raw_height is None else _parse_int(raw_height, "height")
    if root is None and height in (0, EMPTY_HEIGHT):
        height = EMPTY_HEIGHT

    for field, reported, actual in (
        ("nodeCount", node_count, actual_count),
        ("height", height, actual_height),
    ):
        if reported == actual:
            continue
        message = f"{field} is {reported} but the node graph gives {actual}"
        if strict:
            raise SnapshotFormatError(message)
        logger.warning("Snapshot {}: {}", payload.get("id"), message)
    node_count, height = actual_count, actual_height

    balanced = payload.get("isBalanced")
    if balanced is not None and not isinstance(balanced, bool):
        raise SnapshotFormatError(f"Expected boolean isBalanced, got {balanced!r}")

    inputs = payload.get("originalInputs") or ()
    return TreeSnapshot(
        root_node=root,
        node_count=node_count,
        height=height,
        is_balanced=balanced,
        original_inputs=tuple(_parse_int(value, "original input") for value in inputs),
        id=payload.get("id"),
        name=payload.get("name"),
        created_at=_parse_created_at(payload.get("createdAt")),
    )


def load_snapshot(path: Path | str, *, strict: bool = True) -> TreeSnapshot:
    resolved = Path(path).expanduser().resolve()
    try:
        payload = orjson.loads(resolved.read_bytes())
    except orjson.JSONDecodeError as exc:
        raise SnapshotFormatError(f"{resolved.name} is not valid JSON: {exc}") from exc
    return parse_snapshot(payload, strict=strict)
