"""Tree snapshots and the tree service client."""

from .client import ApiSettings, TreeApiClient, TreePage
from .errors import NotFoundError, SnapshotFormatError, TreeApiError, ValidationError
from .inputs import parse_values, validate_name
from .snapshot import TreeNode, TreeSnapshot, load_snapshot, parse_snapshot

__all__ = [
    "ApiSettings",
    "NotFoundError",
    "SnapshotFormatError",
    "TreeApiClient",
    "TreeApiError",
    "TreeNode",
    "TreePage",
    "TreeSnapshot",
    "ValidationError",
    "load_snapshot",
    "parse_snapshot",
    "parse_values",
    "validate_name",
]
