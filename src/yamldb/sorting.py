"""Key ordering functions for the ordered index."""

from __future__ import annotations

from typing import Callable

OrderFunc = Callable[[str, str], bool]


def order_alphabetically(a: str, b: str) -> bool:
    """Order keys from a -> z."""
    return a < b


def order_alphabetically_reversed(a: str, b: str) -> bool:
    """Order keys from z -> a."""
    return a > b
