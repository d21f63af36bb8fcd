from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import networkx as nx

from .layout import PositionedNode
from .scene import TreeScene


def layout_to_networkx(positions: Sequence[PositionedNode]) -> nx.DiGraph:
    """Convert a laid-out tree to a NetworkX ``DiGraph``.

    Graph nodes are pre-order indices into ``positions``; the rendering key
    is kept as the ``key`` attribute since server ids may repeat.
    """

    graph = nx.DiGraph()
    for index, placed in enumerate(positions):
        graph.add_node(
            index,
            key=placed.key,
            pos=(placed.x, placed.y),
            value=placed.node.value,
            depth=placed.depth,
        )
        if placed.has_parent:
            graph.add_edge(placed.parent_index, index)
    return graph


def draw_scene(scene: TreeScene, title: str | None = None, dpi: int = 100):
    """Draw ``scene`` with matplotlib in screen coordinates and return the figure."""

    fig, ax = plt.subplots(figsize=(scene.width / dpi, scene.height / dpi), dpi=dpi)
    graph = layout_to_networkx(scene.positions)
    if graph.number_of_nodes():
        radius = scene.circles[0].r
        positions = nx.get_node_attributes(graph, "pos")
        labels = {key: str(value) for key, value in graph.nodes(data="value")}
        # node_size is an area in points squared.
        node_size = (2 * radius * 72.0 / dpi) ** 2
        nx.draw_networkx(
            graph,
            pos=positions,
            ax=ax,
            labels=labels,
            node_color="#e3f2fd",
            edgecolors="#1565c0",
            node_size=node_size,
            font_size=10,
            arrows=False,
            width=1.5,
        )
    ax.set_xlim(0, scene.width)
    ax.set_ylim(scene.height, 0)
    ax.set_title(title if title is not None else scene.metadata.get("name") or "")
    ax.axis("off")
    fig.tight_layout()
    return fig


def save_scene_image(scene: TreeScene, destination: Path | str, **kwargs) -> Path:
    path = Path(destination).expanduser()
    fig = draw_scene(scene, **kwargs)
    try:
        fig.savefig(path)
    finally:
        plt.close(fig)
    return path
