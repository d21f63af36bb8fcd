from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import tkinter as tk
from tkinter import font as tkfont

from loguru import logger

from bstviz.visualization import TreeScene
from bstviz.visualization.scene import fit_transform

Box = Tuple[float, float, float, float]


class TkTreeViewer:
    """Render a binary tree scene using Tkinter."""

    def __init__(
        self,
        scene: TreeScene,
        title: str,
        *,
        summary_lines: Sequence[str] = (),
        maximize: bool = False,
    ) -> None:
        self.scene = scene
        self.title = title
        self.summary_lines = list(summary_lines)
        self.maximize = maximize

    def run(self, output: Path | None = None) -> None:
        root = tk.Tk()
        root.withdraw()
        root.title(self.title)
        root.geometry(f"{int(self.scene.width) + 360}x{int(self.scene.height) + 40}")
        if self.maximize:
            try:
                root.state("zoomed")
            except tk.TclError:
                root.attributes("-zoomed", True)

        node_font = tkfont.Font(family="Helvetica", size=12, weight="bold")
        info_font = tkfont.Font(family="Helvetica", size=11)

        container = tk.Frame(root, background="#f0f0f0")
        container.pack(fill="both", expand=True)

        tree_frame = tk.Frame(container, background="#ffffff")
        tree_frame.pack(side=tk.LEFT, fill="both", expand=True)

        info_frame = tk.Frame(container, background="#fafafa", width=340)
        info_frame.pack(side=tk.RIGHT, fill="both")
        info_frame.pack_propagate(False)

        info_panel = _InfoPanel(
            info_frame,
            summary_lines=self.summary_lines,
            title_font=node_font,
            info_font=info_font,
        )
        info_panel.pack(side=tk.TOP, fill="both", expand=True, padx=12, pady=12)

        tree_canvas = _TreeCanvas(
            tree_frame,
            self.scene,
            info_panel=info_panel,
            node_font=node_font,
        )
        tree_canvas.pack(fill="both", expand=True)

        root.update_idletasks()
        root.deiconify()
        root.lift()
        root.focus_force()

        if output:
            try:
                tree_canvas.save_postscript(output)
            except tk.TclError as exc:
                logger.error("Failed to save canvas: {}", exc)

        root.mainloop()


class _TreeCanvas(tk.Canvas):
    """Canvas that draws the scene scaled to fit and reports hovered nodes."""

    def __init__(
        self,
        master: tk.Misc,
        scene: TreeScene,
        *,
        info_panel: "_InfoPanel",
        node_font: tkfont.Font,
        **kwargs,
    ) -> None:
        super().__init__(master, background="white", highlightthickness=0, **kwargs)
        self.scene = scene
        self.info_panel = info_panel
        self.node_font = node_font
        self.node_boxes: Dict[int, Box] = {}
        self.node_details: Dict[int, List[str]] = {}
        self._current_hover: Optional[int] = None

        self.bind("<Configure>", self._on_resize)
        self.bind("<Motion>", self._on_mouse_move)
        self.bind("<Leave>", self._on_mouse_leave)

        self._draw(self.winfo_reqwidth(), self.winfo_reqheight())

    def save_postscript(self, destination: Path) -> None:
        self.update_idletasks()
        self.postscript(file=str(destination))

    def _on_resize(self, event: tk.Event) -> None:
        self._draw(event.width, event.height)

    def _draw(self, width: int, height: int) -> None:
        self.delete("all")
        self.node_boxes.clear()
        self.node_details.clear()

        if self.scene.is_empty:
            self.create_text(
                width / 2,
                height / 2,
                text="Empty tree",
                fill="#90a4ae",
                font=self.node_font,
            )
            return

        scale, dx, dy = fit_transform(self.scene, width, height, margin=12)

        def map_point(x: float, y: float) -> Tuple[float, float]:
            return dx + x * scale, dy + y * scale

        for line in self.scene.lines:
            x1, y1 = map_point(line.x1, line.y1)
            x2, y2 = map_point(line.x2, line.y2)
            self.create_line(x1, y1, x2, y2, width=2, fill="#424242")

        for index, (circle, placed) in enumerate(zip(self.scene.circles, self.scene.positions)):
            cx, cy = map_point(circle.cx, circle.cy)
            r = circle.r * scale
            box = (cx - r, cy - r, cx + r, cy + r)
            self.node_boxes[index] = box
            self.create_oval(*box, outline="#1565c0", width=2, fill="#e3f2fd")
            self.node_details[index] = [
                f"Value: {placed.node.value}",
                f"Depth: {placed.depth}",
                f"Left child: {_child_text(placed.node.left)}",
                f"Right child: {_child_text(placed.node.right)}",
            ]

        for label in self.scene.labels:
            x, y = map_point(label.x, label.y)
            self.create_text(x, y, text=label.text, fill="#000000", font=self.node_font)

    def _on_mouse_move(self, event: tk.Event) -> None:
        for key, (x0, y0, x1, y1) in self.node_boxes.items():
            if x0 <= event.x <= x1 and y0 <= event.y <= y1:
                if self._current_hover != key:
                    self._current_hover = key
                    self.info_panel.show_node(self.node_details.get(key, []))
                return
        self._on_mouse_leave(event)

    def _on_mouse_leave(self, _: tk.Event) -> None:
        if self._current_hover is not None:
            self._current_hover = None
            self.info_panel.show_node([])


def _child_text(node: Any) -> str:
    return "none" if node is None else str(node.value)


class _InfoPanel(tk.Frame):
    """Panel listing the tree summary and the hovered node."""

    def __init__(
        self,
        master: tk.Misc,
        *,
        summary_lines: Sequence[str],
        title_font: tkfont.Font,
        info_font: tkfont.Font,
    ) -> None:
        super().__init__(master, background="#fafafa")
        tk.Label(
            self,
            text="Tree",
            font=title_font,
            anchor="w",
            background="#fafafa",
        ).pack(fill="x", pady=(0, 8))
        tk.Label(
            self,
            text="\n".join(summary_lines),
            font=info_font,
            anchor="w",
            justify=tk.LEFT,
            background="#fafafa",
        ).pack(fill="x")
        tk.Label(
            self,
            text="Node",
            font=title_font,
            anchor="w",
            background="#fafafa",
        ).pack(fill="x", pady=(16, 8))
        self._node_label = tk.Label(
            self,
            font=info_font,
            anchor="w",
            justify=tk.LEFT,
            background="#fafafa",
        )
        self._node_label.pack(fill="x")
        self.show_node([])

    def show_node(self, lines: Sequence[str]) -> None:
        self._node_label.configure(text="\n".join(lines) or "Hover a node to inspect it.")
