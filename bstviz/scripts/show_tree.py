from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Callable, Sequence

from loguru import logger

from bstviz.trees import (
    TreeApiClient,
    TreeApiError,
    TreeSnapshot,
    load_snapshot,
    parse_values,
)
from bstviz.visualization import LayoutConfig, build_tree_scene, write_svg
from bstviz.visualization.summary import format_summary, list_row, snapshot_json

DEFAULT_VIEWPORT_WIDTH = 800.0

ClientFactory = Callable[..., TreeApiClient]


def confirm(
    prompt: str,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[[str], None] = print,
) -> bool:
    """Ask a yes/no question until the answer is recognised."""

    while True:
        response = input_fn(f"{prompt} [y/N]: ").strip().lower()
        if response in ("y", "yes"):
            return True
        if response in ("", "n", "no"):
            return False
        print_fn("Please answer 'y' or 'n'.")


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Print the simplified tree JSON.")
    parser.add_argument("--svg", type=Path, default=None, help="Write the rendering as SVG.")
    parser.add_argument(
        "--png", type=Path, default=None, help="Write the rendering as an image via matplotlib."
    )
    parser.add_argument("--view", action="store_true", help="Open the interactive Tk viewer.")
    parser.add_argument(
        "--width",
        type=float,
        default=DEFAULT_VIEWPORT_WIDTH,
        help="Viewport width available to the tree (default: %(default)s).",
    )
    parser.add_argument(
        "--decay",
        type=float,
        default=1.0,
        help="Per-level damping of the horizontal child offset, in (0, 1].",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bstviz",
        description="Create, list, view and delete binary search trees on the tree service.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Tree service URL (default: $BSTVIZ_API_BASE_URL or http://localhost:8080/api/trees).",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create", help="Build a tree from comma-separated numbers.")
    create.add_argument("name", help="Name for the new tree.")
    create.add_argument("values", help="Numbers separated by commas, e.g. '50, 30, 70'.")
    _add_output_options(create)

    listing = commands.add_parser("list", help="List previously created trees.")
    listing.add_argument("--page", type=int, default=1, help="1-based page number.")
    listing.add_argument("--size", type=int, default=5, help="Trees per page.")

    show = commands.add_parser("show", help="Load a tree by id and render it.")
    show.add_argument("tree_id")
    _add_output_options(show)

    render = commands.add_parser("render", help="Render a snapshot JSON file offline.")
    render.add_argument("file", type=Path)
    _add_output_options(render)

    delete = commands.add_parser("delete", help="Delete a tree by id.")
    delete.add_argument("tree_id")
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")
    return parser


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _present(
    snapshot: TreeSnapshot,
    args: argparse.Namespace,
    print_fn: Callable[[str], None],
) -> None:
    for line in format_summary(snapshot):
        print_fn(line)
    if args.json:
        print_fn(snapshot_json(snapshot))

    if not (args.svg or args.png or args.view):
        return
    config = LayoutConfig(decay=args.decay)
    scene = build_tree_scene(snapshot, args.width, config)
    if args.svg:
        print_fn(f"Wrote {write_svg(scene, args.svg)}")
    if args.png:
        from bstviz.visualization.plot import save_scene_image

        print_fn(f"Wrote {save_scene_image(scene, args.png)}")
    if args.view:
        from bstviz.viewers import TkTreeViewer

        title = f"{snapshot.name or 'Tree'} ({snapshot.node_count} nodes)"
        TkTreeViewer(scene, title, summary_lines=format_summary(snapshot)).run()


def _list(client: TreeApiClient, args: argparse.Namespace, print_fn) -> None:
    page = client.list(max(args.page, 1) - 1, args.size)
    if not page.trees:
        print_fn("No previous trees found")
        return
    for snapshot in page.trees:
        print_fn(list_row(snapshot))
    print_fn(f"Page {page.page + 1} of {page.total_pages}")


def run(
    argv: Sequence[str] | None = None,
    *,
    client_factory: ClientFactory = TreeApiClient,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[[str], None] = print,
) -> int:
    """Execute one command and return the process exit status."""

    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "render":
            _present(load_snapshot(args.file), args, print_fn)
            return 0

        with client_factory(args.base_url, timeout=args.timeout) as client:
            if args.command == "create":
                snapshot = client.create(args.name, parse_values(args.values))
                _present(snapshot, args, print_fn)
            elif args.command == "list":
                _list(client, args, print_fn)
            elif args.command == "show":
                _present(client.get(args.tree_id), args, print_fn)
            elif args.command == "delete":
                if not args.yes and not confirm(
                    "Are you sure you want to delete this tree?",
                    input_fn=input_fn,
                    print_fn=print_fn,
                ):
                    print_fn("Cancelled.")
                    return 0
                client.delete(args.tree_id)
                print_fn(f"Deleted tree {args.tree_id}")
    except TreeApiError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
