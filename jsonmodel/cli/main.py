"""jsonmodel CLI - Main entrypoint."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from jsonmodel import __version__
from jsonmodel.cli.commands import parse_cmd, schema_cmd
from jsonmodel.core.config import load_config
from jsonmodel.core.exceptions import ConfigurationError
from jsonmodel.core.logging import LOG_LEVELS, configure_logging, normalize_level

app = typer.Typer(
    name="jsonmodel",
    help="jsonmodel - derive JSON Schemas from typed models and parse JSON back into them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()
err_console = Console(stderr=True)

app.command("schema", help="Print the JSON Schema of a model")(schema_cmd.schema)
app.command("parse", help="Parse JSON into a model and print it back")(parse_cmd.parse)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]jsonmodel[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to jsonmodel.toml or pyproject.toml"
    ),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warning|error"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """jsonmodel CLI.

    Global flags are parsed here; the loaded configuration is stored on
    ``ctx.obj`` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ConfigurationError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    # Compute effective log level
    effective_level = config.logging.level
    if quiet:
        effective_level = "ERROR"
    elif verbose:
        effective_level = "DEBUG"
    elif log_level:
        level = normalize_level(log_level)
        if level is None:
            choices = ", ".join(name.lower() for name in LOG_LEVELS)
            err_console.print(
                f"[red]Error:[/red] unknown log level {escape(repr(log_level))} "
                f"(choose from {choices})"
            )
            raise typer.Exit(1)
        effective_level = level  # type: ignore[assignment]

    configure_logging(
        level=effective_level,
        format=config.logging.format,
        output_file=config.logging.output_file,
        use_color=config.logging.use_color,
        include_timestamp=config.logging.include_timestamp,
        replace_default_sink=True,
    )

    ctx.obj.update({"config": config, "log_level": effective_level})


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
