"""CLI for formwork."""

import json
from pathlib import Path
from typing import Annotated

import jsonschema
import typer
from rich.console import Console
from rich.table import Table

from formwork import __version__
from formwork.config import get_registry_path, load_global_config
from formwork.definition import FormRegistry, load
from formwork.definition.loader import read_document
from formwork.errors import ConfigurationError, FormworkError
from formwork.model import DynamicFormModel
from formwork.rendering import RenderDispatcher
from formwork.submission import Form, FormRequest, InMemoryTokenStore

app = typer.Typer(
    name="formwork",
    help="Declarative form definitions and rendering.",
    no_args_is_help=True,
)
console = Console()

DEFAULT_SCHEMA_PATH = Path("schemas") / "form_definition.schema.json"


def version_callback(value: bool) -> None:
    if value:
        console.print(f"formwork version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """formwork: Declarative form definitions and rendering."""
    pass


def _load_definition(path: Path):
    if not path.exists():
        console.print(f"[red]Error:[/red] Definition file not found: {path}")
        raise typer.Exit(1)
    try:
        return load(read_document(path))
    except ConfigurationError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def validate(
    definition_path: Annotated[
        Path,
        typer.Argument(help="Path to the form definition (JSON or YAML)"),
    ],
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", "-s", help="Path to the schema file"),
    ] = None,
) -> None:
    """Validate a form definition against the schema and the loader rules."""
    if not definition_path.exists():
        console.print(f"[red]Error:[/red] Definition file not found: {definition_path}")
        raise typer.Exit(1)

    if schema_path is None and DEFAULT_SCHEMA_PATH.exists():
        schema_path = DEFAULT_SCHEMA_PATH

    try:
        data = read_document(definition_path)
    except ConfigurationError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)

    if schema_path is not None:
        if not schema_path.exists():
            console.print(f"[red]Error:[/red] Schema file not found: {schema_path}")
            raise typer.Exit(1)
        with open(schema_path) as f:
            schema = json.load(f)
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            console.print(f"[red]Invalid:[/red] {e.message}")
            raise typer.Exit(1)

    try:
        load(data)
    except ConfigurationError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Valid:[/green] {definition_path}")


@app.command()
def show(
    definition_path: Annotated[
        Path,
        typer.Argument(help="Path to the form definition (JSON or YAML)"),
    ],
) -> None:
    """Show the elements and buttons of a form definition."""
    definition = _load_definition(definition_path)

    console.print(f"[bold]{definition.title or definition_path.stem}[/bold]")
    if definition.description:
        console.print(definition.description)
    console.print(f"  Method: {definition.method.value}")
    console.print(f"  Action: {definition.action or '(current URL)'}")

    elements = Table(title="Elements")
    elements.add_column("Name")
    elements.add_column("Type")
    elements.add_column("Label")
    elements.add_column("Items", justify="right")
    elements.add_column("Attributes")
    for name, element in definition.elements.items():
        elements.add_row(
            name,
            element.type.value,
            element.label or "",
            str(len(element.items)) if element.items is not None else "",
            ", ".join(f"{k}={v}" for k, v in element.extra_attributes.items()),
        )
    console.print(elements)

    if definition.buttons:
        buttons = Table(title="Buttons")
        buttons.add_column("Name")
        buttons.add_column("Type")
        buttons.add_column("Label")
        for name, button in definition.buttons.items():
            buttons.add_row(name, button.type.value, button.label or "")
        console.print(buttons)


@app.command()
def render(
    definition_path: Annotated[
        Path,
        typer.Argument(help="Path to the form definition (JSON or YAML)"),
    ],
    values: Annotated[
        str | None,
        typer.Option("--values", help="JSON object of field values"),
    ] = None,
    errors: Annotated[
        str | None,
        typer.Option("--errors", help="JSON object of field -> list of error messages"),
    ] = None,
) -> None:
    """Render a form definition to HTML."""
    definition = _load_definition(definition_path)
    config = load_global_config()

    model = DynamicFormModel.for_definition(definition)
    try:
        if values:
            model.set_values(json.loads(values), safe_only=False)
        if errors:
            model.add_errors(json.loads(errors))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON: {e}")
        raise typer.Exit(1)

    form = Form(
        definition,
        model,
        FormRequest(),
        InMemoryTokenStore(),
        token_name=config.token_name,
    )
    html = RenderDispatcher(form, config=config).render()
    console.print(html, markup=False, highlight=False, soft_wrap=True)


@app.command("list")
def list_forms(
    registry: Annotated[
        Path | None,
        typer.Option(
            "--registry",
            "-r",
            envvar="FORMWORK_REGISTRY",
            help="Path to the form registry",
        ),
    ] = None,
) -> None:
    """List form definitions and their versions in a registry."""
    if registry is None:
        try:
            registry = get_registry_path()
        except FormworkError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

    if not registry.exists():
        console.print(f"[red]Error:[/red] Form registry not found: {registry}")
        raise typer.Exit(1)

    form_registry = FormRegistry(registry)
    form_ids = form_registry.list_forms()
    if not form_ids:
        console.print(f"[yellow]No forms found in {registry}[/yellow]")
        return

    table = Table(title=f"Forms in {registry}")
    table.add_column("Form")
    table.add_column("Versions")
    for form_id in form_ids:
        table.add_row(form_id, ", ".join(form_registry.list_versions(form_id)))
    console.print(table)


if __name__ == "__main__":
    app()
