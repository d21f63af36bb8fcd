from pathlib import Path

import pytest

from bstviz.trees import TreeNode, TreeSnapshot, load_snapshot


DATA_DIR = Path(__file__).parent / "data"


def _insert(node, value):
    if node is None:
        return TreeNode(value)
    if value < node.value:
        return TreeNode(node.value, _insert(node.left, value), node.right)
    if value > node.value:
        return TreeNode(node.value, node.left, _insert(node.right, value))
    return node


def make_snapshot(values, **extra):
    """Build a snapshot the way the tree service would, for fixtures only."""

    root = None
    for value in values:
        root = _insert(root, value)
    probe = TreeSnapshot(root_node=root, node_count=0, height=-1)
    return TreeSnapshot(
        root_node=root,
        node_count=probe.count_nodes(),
        height=probe.measure_height(),
        original_inputs=tuple(values),
        **extra,
    )


@pytest.fixture
def balanced_snapshot():
    return make_snapshot([50, 30, 70, 20, 40, 60, 80], is_balanced=True, name="balanced")


@pytest.fixture
def chain_snapshot():
    return make_snapshot([1, 2, 3, 4, 5], is_balanced=False, name="chain")


@pytest.fixture
def empty_snapshot():
    return TreeSnapshot(root_node=None, node_count=0, height=-1)


@pytest.fixture(scope="session")
def balanced_payload_path():
    return DATA_DIR / "balanced.json"


@pytest.fixture(scope="session")
def file_snapshot(balanced_payload_path):
    return load_snapshot(balanced_payload_path)


@pytest.fixture
def build_snapshot():
    return make_snapshot
