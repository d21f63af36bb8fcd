"""Parsing and validation of user-supplied tree names and values."""

from __future__ import annotations

import re
from typing import List

from .errors import ValidationError

_UNSAFE_NAME_CHARS = re.compile(r"[<>(){}\[\]\\/^$|?*+]")


def parse_values(raw: str) -> List[int]:
    """Parse a comma-separated list of integers such as ``"50, 30, 70"``."""

    parts = [part.strip() for part in raw.split(",")]
    values: List[int] = []
    for part in parts:
        if not part:
            continue
        try:
            values.append(int(part, 10))
        except ValueError:
            raise ValidationError("Please enter valid numbers separated by commas") from None
    if not values:
        raise ValidationError("Please enter at least one number")
    return values


def validate_name(name: str) -> str:
    """Return ``name`` stripped, rejecting blank names and unsafe characters."""

    stripped = name.strip()
    if not stripped:
        raise ValidationError("Please enter a name for the tree")
    if _UNSAFE_NAME_CHARS.search(stripped):
        raise ValidationError("Name contains potentially unsafe special characters")
    return stripped
