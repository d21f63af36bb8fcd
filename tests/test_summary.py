import json

from bstviz.trees import TreeSnapshot
from bstviz.visualization.summary import format_summary, list_row, snapshot_json, summary_rows


def test_summary_rows(file_snapshot):
    assert summary_rows(file_snapshot) == [
        ("ID", "42"),
        ("Name", "demo"),
        ("Original Inputs", "50, 30, 70, 20, 40, 60, 80, 30"),
        ("Nodes", "7"),
        ("Height", "2"),
        ("Balanced", "true"),
    ]


def test_format_summary_aligns_labels(file_snapshot):
    lines = format_summary(file_snapshot)
    width = len("Original Inputs:")
    assert lines[0] == "ID:".ljust(width) + " 42"
    assert lines[2] == "Original Inputs: 50, 30, 70, 20, 40, 60, 80, 30"
    assert lines[-1] == "Balanced:".ljust(width) + " true"


def test_unknown_balance(empty_snapshot):
    assert summary_rows(empty_snapshot)[-1] == ("Balanced", "unknown")


def test_snapshot_json_is_simplified(file_snapshot):
    text = snapshot_json(file_snapshot)
    assert text.startswith("{\n  ")
    data = json.loads(text)
    assert data["nodeCount"] == 7
    assert "name" not in data
    assert data["rootNode"]["right"]["right"] == {"value": 80, "left": None, "right": None}


def test_snapshot_json_full(file_snapshot):
    data = json.loads(snapshot_json(file_snapshot, simplified=False))
    assert data["name"] == "demo"
    assert data["createdAt"] == "2025-03-14T09:26:53+00:00"


def test_list_row(file_snapshot):
    row = list_row(file_snapshot)
    assert row == "[42] demo  Nodes: 7 | Height: 2  2025-03-14 09:26:53  Balanced"


def test_list_row_without_balance():
    snapshot = TreeSnapshot(root_node=None, node_count=0, height=-1, name="empty")
    assert list_row(snapshot) == "empty  Nodes: 0 | Height: -1"
