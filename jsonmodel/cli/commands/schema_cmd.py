"""Schema command - print the JSON Schema of a model."""

from enum import StrEnum
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from jsonmodel.core.config import JsonModelConfig
from jsonmodel.core.exceptions import JsonModelError
from jsonmodel.core.introspection import is_model_class
from jsonmodel.core.registry import import_model
from jsonmodel.core.schema import SchemaGenerator

err_console = Console(stderr=True)


class SchemaFormat(StrEnum):
    JSON = "json"
    YAML = "yaml"


def load_model_class(reference: str) -> type:
    """Import ``module:Model`` and check it is a model class.

    Raises
    ------
    typer.Exit
        With code 1 if the reference cannot be imported or is not a model
    """
    try:
        model = import_model(reference)
    except JsonModelError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    if not is_model_class(model):
        err_console.print(f"[red]Error:[/red] {escape(reference)} is not a jsonmodel model")
        raise typer.Exit(1)
    return model


def schema(
    ctx: typer.Context,
    model_ref: Annotated[
        str, typer.Argument(metavar="MODULE:MODEL", help="Model to describe (e.g. shop.models:Product)")
    ],
    format: Annotated[
        SchemaFormat,
        typer.Option("--format", "-f", help="Output format (json, yaml)"),
    ] = SchemaFormat.JSON,
    openai: Annotated[
        bool,
        typer.Option("--openai", help="Wrap the schema in the {name, schema, strict} envelope"),
    ] = False,
) -> None:
    """Print the JSON Schema derived from a model.

    Examples
    --------
    jsonmodel schema shop.models:Product
    jsonmodel schema shop.models:Product --format yaml
    jsonmodel schema shop.models:Product --openai
    """
    config: JsonModelConfig = (ctx.obj or {}).get("config") or JsonModelConfig()
    model = load_model_class(model_ref)

    generator = SchemaGenerator()
    try:
        document = generator.from_model(model)
    except JsonModelError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    if openai:
        document = generator.function_calling(document)  # type: ignore[arg-type]

    typer.echo(
        generator.format_output(document, format.value, indent=config.schema.indent)  # type: ignore[arg-type]
    )
