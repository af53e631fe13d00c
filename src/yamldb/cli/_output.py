"""Output formatting helpers for the CLI."""

from __future__ import annotations

import json
import sys
from typing import Any


def print_object(data: dict[str, Any] | list[Any], *, json_mode: bool = False) -> None:
    """Print a single object or list as JSON or key-value pairs."""
    if json_mode:
        print(json.dumps(data, indent=2, default=str))
        return

    if isinstance(data, list):
        for item in data:
            print(item)
        return

    for k, v in data.items():
        print(f"{k}: {v}")


def print_error(msg: str) -> None:
    """Print an error message to stderr."""
    print(f"Error: {msg}", file=sys.stderr)
