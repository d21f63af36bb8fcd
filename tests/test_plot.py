import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from bstviz.trees import TreeNode, TreeSnapshot
from bstviz.visualization import build_tree_scene, compute_tree_layout
from bstviz.visualization.plot import draw_scene, layout_to_networkx, save_scene_image


def test_layout_graph_structure(balanced_snapshot):
    positions = compute_tree_layout(balanced_snapshot, 800.0)
    graph = layout_to_networkx(positions)
    assert graph.number_of_nodes() == 7
    assert graph.number_of_edges() == 6
    values = {key: value for key, value in graph.nodes(data="value")}
    edges = {(values[parent], values[child]) for parent, child in graph.edges}
    assert edges == {(50, 30), (50, 70), (30, 20), (30, 40), (70, 60), (70, 80)}
    assert graph.nodes[0]["pos"] == (400.0, 40.0)
    assert graph.nodes[0]["key"] == positions[0].key


def test_draw_scene_uses_screen_coordinates(balanced_snapshot):
    scene = build_tree_scene(balanced_snapshot, 800.0)
    fig = draw_scene(scene)
    try:
        ax = fig.axes[0]
        assert ax.get_ylim() == (scene.height, 0.0)
        assert ax.get_title() == "balanced"
    finally:
        plt.close(fig)


def test_save_empty_scene(tmp_path, empty_snapshot):
    scene = build_tree_scene(empty_snapshot, 400.0)
    path = save_scene_image(scene, tmp_path / "empty.png", title="empty")
    assert path.exists()
    assert path.stat().st_size > 0


def test_duplicate_node_ids_keep_separate_graph_nodes():
    root = TreeNode(2, TreeNode(1, id="dup"), TreeNode(3, id="dup"), id="root")
    snapshot = TreeSnapshot(root_node=root, node_count=3, height=1)
    graph = layout_to_networkx(compute_tree_layout(snapshot, 800.0))
    assert graph.number_of_nodes() == 3
    assert sorted(graph.edges) == [(0, 1), (0, 2)]


def test_edges_follow_parents_when_positions_coincide():
    # Past depth ~53 the child offset vanishes next to x, so siblings share a point.
    subtree = TreeNode(
        100,
        TreeNode(90, left=TreeNode(85)),
        TreeNode(110, right=TreeNode(115)),
    )
    chain = subtree
    for value in range(60, 0, -1):
        chain = TreeNode(value, right=chain)
    snapshot = TreeSnapshot(root_node=chain, node_count=65, height=62)
    positions = compute_tree_layout(snapshot, 800.0)
    by_value = {p.node.value: i for i, p in enumerate(positions)}
    assert positions[by_value[90]].x == positions[by_value[110]].x

    graph = layout_to_networkx(positions)
    assert graph.has_edge(by_value[90], by_value[85])
    assert graph.has_edge(by_value[110], by_value[115])
    assert graph.in_degree(by_value[115]) == 1
