"""yamldb get / put / rm: single record commands."""

from __future__ import annotations

import sys
from typing import Optional

import typer
import yaml

from yamldb.cli import _exitcodes as ec
from yamldb.cli._output import print_error, print_object
from yamldb.cli._storage import open_db
from yamldb.errors import NotFoundError, YamlDbError


def get_cmd(
    key: str = typer.Argument(..., help="Key of the record"),
) -> None:
    """Print a stored record."""
    from yamldb.cli import state

    db = open_db()
    try:
        data = db.read_raw(key)
    except NotFoundError as e:
        print_error(str(e))
        raise typer.Exit(ec.NOT_FOUND)
    except (YamlDbError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)

    if state.json_output:
        try:
            value = yaml.safe_load(data)
        except yaml.YAMLError as e:
            print_error(f"Record '{key}' is not valid YAML: {e}")
            raise typer.Exit(ec.DECODE_ERROR)
        print_object({"key": key, "value": value}, json_mode=True)
    else:
        sys.stdout.write(data.decode("utf-8"))


def put_cmd(
    key: str = typer.Argument(..., help="Key of the record"),
    path: Optional[str] = typer.Argument(None, help="YAML file to store (default: stdin)"),
) -> None:
    """Store a YAML document under a key."""
    if path is None or path == "-":
        data = sys.stdin.read().encode("utf-8")
    else:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            print_error(f"Cannot read {path}: {e}")
            raise typer.Exit(ec.USAGE_ERROR)

    try:
        yaml.safe_load(data)
    except yaml.YAMLError as e:
        print_error(f"Input is not valid YAML: {e}")
        raise typer.Exit(ec.USAGE_ERROR)

    db = open_db()
    try:
        db.write_raw(key, data)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(ec.USAGE_ERROR)
    except YamlDbError as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)
    print(f"Stored {key} ({len(data)} bytes)")


def rm_cmd(
    key: str = typer.Argument(..., help="Key of the record"),
) -> None:
    """Delete a record."""
    db = open_db()
    try:
        db.delete(key)
    except NotFoundError as e:
        print_error(str(e))
        raise typer.Exit(ec.NOT_FOUND)
    except (YamlDbError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)
    print(f"Deleted {key}")
