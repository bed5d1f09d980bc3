from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Literal

import typer
import yaml

from treeconf.config import MISSING, Config, ConfigError
from treeconf.settings import get_settings

FormatOption = Annotated[
    Literal["yaml", "json"],
    typer.Option("--format", "-f", show_default=True, case_sensitive=False, help="Output format (yaml or json)."),
]
PathsOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--path",
        "-p",
        help="Directory to search for the configuration file. Repeat to add more, highest priority first.",
    ),
]
FilenameOption = Annotated[
    str | None,
    typer.Option("--filename", help="Configuration file name without extension."),
]

app = typer.Typer(help="Inspect and edit configuration files.")


@app.callback(invoke_without_command=True)
def _config_root(
    ctx: typer.Context,
    paths: PathsOption = None,
    filename: FilenameOption = None,
) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    ctx.obj = _build_config(paths, filename)


@app.command("show")
def show(ctx: typer.Context, format: FormatOption = "yaml") -> None:
    """Print the located configuration file."""
    config = _read(ctx.obj)
    typer.echo(_format_payload(config.to_dict(), format.lower()))


@app.command("get")
def get(ctx: typer.Context, key: str, format: FormatOption = "yaml") -> None:
    """Print the value stored under KEY."""
    config = _read(ctx.obj)
    value = config.fetch(key, default=MISSING)
    if value is MISSING:
        typer.secho(f"Key '{key}' is not set.", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if isinstance(value, dict | list):
        typer.echo(_format_payload(value, format.lower()))
    else:
        typer.echo(value)


@app.command("set")
def set_value(ctx: typer.Context, key: str, value: str) -> None:
    """Store VALUE under KEY and save the file. VALUE is parsed as YAML."""
    config: Config = ctx.obj
    if config.persisted:
        config = _read(config)

    try:
        config.set(key, value=_parse_value(value))
        path = config.write(force=True)
    except ConfigError as error:
        _handle_error(error)
        raise typer.Exit(code=1) from error

    typer.echo(f"Updated {path}")


@app.command("unset")
def unset(ctx: typer.Context, key: str) -> None:
    """Remove KEY from the configuration file."""
    config = _read(ctx.obj)
    if config.delete(key, default=MISSING) is MISSING:
        typer.secho(f"Key '{key}' is not set.", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    try:
        path = config.write(force=True)
    except ConfigError as error:
        _handle_error(error)
        raise typer.Exit(code=1) from error

    typer.echo(f"Updated {path}")


@app.command("path")
def path(ctx: typer.Context) -> None:
    """Print the path of the located configuration file."""
    config: Config = ctx.obj
    found = config.find_file()
    if found is None:
        typer.secho("No configuration file found.", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(str(found))


def _build_config(paths: list[Path] | None, filename: str | None) -> Config:
    updates: dict[str, object] = {}
    if paths:
        updates["location_paths"] = list(paths)
    if filename:
        updates["filename"] = filename
    options = get_settings().store.model_copy(update=updates)
    return Config.from_options(options)


def _read(config: Config) -> Config:
    try:
        config.read()
    except ConfigError as error:
        _handle_error(error)
        raise typer.Exit(code=1) from error
    return config


def _parse_value(raw: str) -> object:
    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    return parsed


def _format_payload(payload: object, format: str) -> str:
    if format == "json":
        return json.dumps(payload, indent=2, sort_keys=True)
    return yaml.safe_dump(payload, sort_keys=True)


def _handle_error(error: ConfigError) -> None:
    typer.secho(f"[{type(error).__name__}] {error}", err=True, fg=typer.colors.RED)
