"""Config commands: write the template and show the resolved settings."""

import tomllib
from pathlib import Path

import typer
from pydantic import ValidationError

from ..config import default_config_path, load_config, write_config_template
from ..output import get_output_context


def init(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Where to write config.toml (defaults to the per-user location)",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a default config.toml."""
    ctx = get_output_context()
    config_path = config or default_config_path()

    if config_path.exists() and not force:
        ctx.warning(f"Config already exists: {config_path}")
        ctx.print_json({"config": str(config_path), "created": False})
        return

    write_config_template(config_path)
    ctx.success(f"Created config template: {config_path}")
    ctx.print_json({"config": str(config_path), "created": True})


def show_config(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to the per-user config.toml)",
    ),
) -> None:
    """Show the configuration an attempt would use."""
    ctx = get_output_context()
    config_path = config or default_config_path()

    try:
        settings = load_config(config_path)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        ctx.error(f"Invalid configuration in {config_path}: {e}")
        raise typer.Exit(1) from None

    source = str(config_path) if config_path.exists() else "defaults"
    timer = settings.timer
    ctx.print(f"[bold]Source:[/bold] {source}")
    ctx.print(f"[bold]Interval:[/bold] {timer.interval} ms")
    ctx.print(f"[bold]Inspection:[/bold] {'off' if timer.no_inspect else 'on'}")
    ctx.print(f"[bold]Time limit:[/bold] {timer.time_limit} s")
    ctx.print(f"[bold]Decimals:[/bold] {settings.display.decimals}")
    ctx.print_json({"source": source, **settings.model_dump()})
