"""yamldb keys / purge / info: commands over many keys."""

from __future__ import annotations

from typing import Any

import typer

from yamldb.cli import _exitcodes as ec
from yamldb.cli._output import print_error, print_object
from yamldb.cli._storage import open_db
from yamldb.errors import YamlDbError
from yamldb.sorting import order_alphabetically_reversed


def keys_cmd(
    prefix: str = typer.Argument("", help="Only list keys starting with this prefix"),
    sort: bool = typer.Option(False, "--sorted", help="List keys in alphabetical order"),
    reverse: bool = typer.Option(False, "--reverse", help="Reverse the order (implies --sorted)"),
    start_after: str = typer.Option("", "--start-after", help="Only keys ordered after this one"),
) -> None:
    """List stored keys."""
    from yamldb.cli import state

    ordered = sort or reverse or bool(start_after)
    try:
        db = open_db(
            sort_keys=ordered,
            sort_order_func=order_alphabetically_reversed if reverse else None,
        )
        if ordered:
            keys = db.get_ordered_keys(prefix, start_after)
        else:
            keys = list(db.keys(prefix))
    except YamlDbError as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)

    print_object(keys, json_mode=state.json_output)


def purge_cmd(
    prefix: str = typer.Argument("", help="Remove keys starting with this prefix"),
    purge_all: bool = typer.Option(
        False, "--all", help="Remove every file below the base path, not only stored keys"
    ),
    yes: bool = typer.Option(False, "--yes", help="Confirm removal (required)"),
) -> None:
    """Remove records. This cannot be undone!"""
    if not prefix and not purge_all:
        print_error("A prefix or --all is required")
        raise typer.Exit(ec.USAGE_ERROR)
    if not yes:
        print_error("Refusing to purge without --yes")
        raise typer.Exit(ec.USAGE_ERROR)

    db = open_db()
    try:
        if purge_all:
            db.purge_all()
            print(f"Purged everything under {db.options.base_path}")
        else:
            db.purge(prefix)
            print(f"Purged keys starting with '{prefix}'")
    except YamlDbError as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)


def info_cmd() -> None:
    """Show the base path, key count and total size on disk."""
    from yamldb.cli import state

    db = open_db()
    count = 0
    total_bytes = 0
    try:
        for key in db.keys():
            count += 1
            total_bytes += db.disk.path_for(key).stat().st_size
    except (YamlDbError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)

    data: dict[str, Any] = {
        "base_path": db.options.base_path,
        "append_extension": db.options.append_extension,
        "keys": count,
        "size_bytes": total_bytes,
    }
    print_object(data, json_mode=state.json_output)
