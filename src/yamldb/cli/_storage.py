"""CLI helper for opening the database selected by global options."""

from __future__ import annotations

from yamldb.config import DiskOptions
from yamldb.database import YamlDb
from yamldb.sorting import OrderFunc


def open_db(*, sort_keys: bool = False, sort_order_func: OrderFunc | None = None) -> YamlDb:
    """Open the store rooted at the CLI base path."""
    from yamldb.cli import state

    return YamlDb(
        DiskOptions(
            base_path=state.base_path,
            append_extension=state.append_extension,
            sort_keys=sort_keys,
            sort_order_func=sort_order_func,
        )
    )
