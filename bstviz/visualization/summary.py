"""Text views of a tree snapshot: summary table, listing row and JSON."""

from __future__ import annotations

from datetime import datetime
from typing import List, Tuple

import orjson

from bstviz.trees.snapshot import TreeSnapshot


def _balanced_text(value: bool | None) -> str:
    if value is None:
        return "unknown"
    return "true" if value else "false"


def summary_rows(snapshot: TreeSnapshot) -> List[Tuple[str, str]]:
    return [
        ("ID", "" if snapshot.id is None else str(snapshot.id)),
        ("Name", snapshot.name or ""),
        ("Original Inputs", ", ".join(str(value) for value in snapshot.original_inputs)),
        ("Nodes", str(snapshot.node_count)),
        ("Height", str(snapshot.height)),
        ("Balanced", _balanced_text(snapshot.is_balanced)),
    ]


def format_summary(snapshot: TreeSnapshot) -> List[str]:
    rows = summary_rows(snapshot)
    width = max(len(label) for label, _ in rows) + 1
    return [f"{label + ':':<{width}} {text}" for label, text in rows]


def snapshot_json(snapshot: TreeSnapshot, *, simplified: bool = True) -> str:
    """Pretty-print the snapshot with two-space indentation."""

    data = snapshot.simplified() if simplified else snapshot.to_dict()
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8")


def list_row(snapshot: TreeSnapshot) -> str:
    name = snapshot.name or "(unnamed)"
    parts = [name, f"Nodes: {snapshot.node_count} | Height: {snapshot.height}"]
    created = snapshot.created_at
    if isinstance(created, datetime):
        parts.append(created.strftime("%Y-%m-%d %H:%M:%S"))
    elif created:
        parts.append(str(created))
    if snapshot.is_balanced is not None:
        parts.append("Balanced" if snapshot.is_balanced else "Unbalanced")
    prefix = "" if snapshot.id is None else f"[{snapshot.id}] "
    return prefix + "  ".join(parts)
