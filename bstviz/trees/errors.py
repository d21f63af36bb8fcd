from __future__ import annotations


class TreeApiError(RuntimeError):
    """A tree service call failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(TreeApiError):
    """The tree name or values were rejected, locally or by the service."""


class NotFoundError(TreeApiError):
    """No tree exists with the requested id."""


class SnapshotFormatError(ValueError):
    """A tree snapshot payload does not have the expected shape."""
