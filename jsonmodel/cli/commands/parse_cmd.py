"""Parse command - read JSON into a model and print the result."""

import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from jsonmodel.cli.commands.schema_cmd import load_model_class
from jsonmodel.core.config import JsonModelConfig
from jsonmodel.core.exceptions import JsonModelError
from jsonmodel.core.parsing import ParseOptions, ValueParser

err_console = Console(stderr=True)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        err_console.print(f"[red]Error:[/red] input file not found: {escape(source)}")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def parse(
    ctx: typer.Context,
    model_ref: Annotated[
        str, typer.Argument(metavar="MODULE:MODEL", help="Model to parse into (e.g. shop.models:Product)")
    ],
    source: Annotated[
        str, typer.Argument(help="JSON file to read, or '-' for stdin")
    ] = "-",
    strict_nulls: Annotated[
        bool | None,
        typer.Option(
            "--strict-nulls/--lenient-nulls",
            help="Reject null for fields whose type does not allow None",
        ),
    ] = None,
    require_fields: Annotated[
        bool | None,
        typer.Option(
            "--require-fields/--allow-missing",
            help="Reject input that omits a declared field",
        ),
    ] = None,
) -> None:
    """Parse a JSON document into a model and print it back as JSON.

    Strictness defaults come from the [tool.jsonmodel.parser] configuration.

    Examples
    --------
    jsonmodel parse shop.models:Product product.json
    cat product.json | jsonmodel parse shop.models:Product --require-fields
    """
    config: JsonModelConfig = (ctx.obj or {}).get("config") or JsonModelConfig()
    model = load_model_class(model_ref)

    options = ParseOptions(
        reject_null_for_non_nullable=(
            config.parser.reject_null_for_non_nullable if strict_nulls is None else strict_nulls
        ),
        reject_missing_fields=(
            config.parser.reject_missing_fields if require_fields is None else require_fields
        ),
    )

    text = _read_input(source)
    try:
        instance = ValueParser(options=options).parse(model, text)
    except JsonModelError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    typer.echo(instance.to_json(indent=True))
