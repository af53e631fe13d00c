"""yamldb CLI: operator console for inspecting and editing a store on disk."""

from __future__ import annotations

from typing import Optional

import typer

from yamldb.cli import keys, records

app = typer.Typer(
    name="yamldb",
    help="yamldb CLI: inspect and edit a YAML key-value store on disk.",
    no_args_is_help=True,
)


class _State:
    """Global CLI state shared across subcommands."""

    base_path: str = "yamldb-data"
    append_extension: bool = True
    json_output: bool = False


state = _State()


def _version_callback(value: bool) -> None:
    if value:
        from yamldb import __version__

        print(f"yamldb {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    base_path: Optional[str] = typer.Option(
        None,
        "--base-path",
        "-b",
        envvar="YAMLDB_BASE_PATH",
        help="Directory where files are stored (default: yamldb-data)",
    ),
    append_extension: bool = typer.Option(
        True,
        "--append-extension/--no-append-extension",
        envvar="YAMLDB_APPEND_EXTENSION",
        help="Append .yaml to keys that don't end with it",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output when supported"),
    version: bool = typer.Option(
        False, "--version", help="Show version", is_eager=True, callback=_version_callback
    ),
) -> None:
    """Global options for all yamldb commands."""
    state.base_path = base_path or "yamldb-data"
    state.append_extension = append_extension
    state.json_output = json_output
    if ctx.invoked_subcommand is None and not version:
        print(ctx.get_help())
        raise typer.Exit()


app.command(name="get")(records.get_cmd)
app.command(name="put")(records.put_cmd)
app.command(name="rm")(records.rm_cmd)
app.command(name="keys")(keys.keys_cmd)
app.command(name="purge")(keys.purge_cmd)
app.command(name="info")(keys.info_cmd)


def main() -> None:
    """Entry point for the yamldb CLI."""
    app()
