import dataclasses

import pytest
from pytest import approx

from bstviz.trees import TreeNode, TreeSnapshot
from bstviz.visualization import LayoutConfig, build_tree_scene, compute_tree_layout, fit_transform

WIDTH = 800.0


def test_empty_snapshot_gives_empty_scene(empty_snapshot):
    config = LayoutConfig()
    scene = build_tree_scene(empty_snapshot, WIDTH, config)
    assert scene.is_empty
    assert list(scene.primitives) == []
    assert (scene.width, scene.height) == (WIDTH, config.min_height)
    assert scene.content_bounds() is None


def test_empty_snapshot_reported_with_zero_height():
    snapshot = TreeSnapshot(root_node=None, node_count=0, height=0)
    scene = build_tree_scene(snapshot, WIDTH)
    assert scene.is_empty
    assert scene.height == LayoutConfig().min_height


def test_single_node_scene():
    snapshot = TreeSnapshot(root_node=TreeNode(5), node_count=1, height=0)
    scene = build_tree_scene(snapshot, WIDTH)
    assert len(scene.circles) == 1
    assert len(scene.labels) == 1
    assert scene.lines == ()
    assert scene.labels[0].text == "5"
    assert (scene.circles[0].cx, scene.circles[0].cy) == (approx(400.0), approx(40.0))


def test_edges_connect_disc_boundaries(balanced_snapshot):
    config = LayoutConfig(node_radius=15)
    scene = build_tree_scene(balanced_snapshot, WIDTH, config)
    assert len(scene.circles) == 7
    assert len(scene.lines) == 6

    first = scene.lines[0]
    assert (first.x1, first.y1) == (approx(400.0), approx(40.0 + 15))
    assert (first.x2, first.y2) == (approx(200.0), approx(110.0 - 15))
    assert first.child_key == (30, 200.0, 110.0)


def test_canvas_grows_with_height(balanced_snapshot, chain_snapshot):
    config = LayoutConfig(min_height=100)
    balanced = build_tree_scene(balanced_snapshot, WIDTH, config)
    assert balanced.height == approx(3 * config.level_spacing + config.bottom_margin)

    chain = build_tree_scene(chain_snapshot, WIDTH, config)
    assert chain_snapshot.height == 4
    assert chain.height == approx(5 * config.level_spacing + config.bottom_margin)


def test_chain_fits_canvas_without_clipping(chain_snapshot):
    scene = build_tree_scene(chain_snapshot, WIDTH)
    min_x, min_y, max_x, max_y = scene.content_bounds()
    assert min_x >= 0.0
    assert min_y >= 0.0
    assert max_x <= scene.width
    assert max_y <= scene.height


def test_under_reported_height_still_fits(chain_snapshot):
    lying = TreeSnapshot(
        root_node=chain_snapshot.root_node,
        node_count=chain_snapshot.node_count,
        height=1,
    )
    scene = build_tree_scene(lying, WIDTH, LayoutConfig(min_height=50))
    assert scene.content_bounds()[3] <= scene.height


def test_scene_is_idempotent(balanced_snapshot):
    first = build_tree_scene(balanced_snapshot, WIDTH)
    second = build_tree_scene(balanced_snapshot, WIDTH)
    assert first == second


def test_scene_reuses_given_positions(balanced_snapshot):
    positions = compute_tree_layout(balanced_snapshot, 400.0)
    scene = build_tree_scene(balanced_snapshot, 400.0, positions=positions)
    assert scene.positions == positions
    assert [c.cx for c in scene.circles] == [p.x for p in positions]


def test_scene_metadata(file_snapshot):
    scene = build_tree_scene(file_snapshot, WIDTH)
    assert scene.metadata == {
        "id": 42,
        "name": "demo",
        "node_count": 7,
        "height": 2,
        "is_balanced": True,
    }


def test_fit_transform_keeps_aspect(balanced_snapshot):
    scene = build_tree_scene(balanced_snapshot, WIDTH)
    scale, dx, dy = fit_transform(scene, 400.0, 1000.0)
    assert scale == approx(0.5)
    assert dx == approx(0.0)
    assert dy == approx((1000.0 - scene.height * 0.5) / 2)


def test_scene_is_read_only(balanced_snapshot):
    scene = build_tree_scene(balanced_snapshot, WIDTH)
    with pytest.raises(dataclasses.FrozenInstanceError):
        scene.height = 10.0
    with pytest.raises(TypeError):
        scene.metadata["name"] = "changed"
    assert scene.metadata["name"] == "balanced"
