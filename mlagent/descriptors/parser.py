"""Descriptor parser — load a descriptor file into a list of records.

A descriptor holds either one JSON object or an array of them. Both shapes
come out as a list; array elements keep their order and are passed through
as-is, so a non-object element fails later, at validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class DescriptorParseError(Exception):
    """A descriptor file could not be read or is not valid JSON."""

    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(f"Failed to parse json file '{path}': {message}")
        self.path = Path(path)
        self.message = message


def parse(path: str | Path) -> list[Any]:
    """Parse a descriptor file and return its records in order."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DescriptorParseError(path, str(e)) from e

    try:
        root = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise DescriptorParseError(path, str(e)) from e

    if isinstance(root, list):
        return list(root)
    return [root]
