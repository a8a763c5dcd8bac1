"""CLI interface for rtdiagram using Typer framework."""

import importlib
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from rtdiagram import __description__, __version__
from rtdiagram.config import DiagramsConfig, LogLevel, RtDiagramConfig, load_config
from rtdiagram.diagrams import DiagramGenerator, reflow
from rtdiagram.errors import ConfigurationError, InternalConsistencyError
from rtdiagram.models.model import Model

app = typer.Typer(
    name="rtdiagram",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}

EXIT_NOTHING_GENERATED = 2


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"rtdiagram version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """rtdiagram - PlantUML diagrams for capsule models."""


def _setup_logging(config: RtDiagramConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else LOG_LEVELS.get(config.logging.level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_model(reference: str, search_path: Path | None = None) -> Model:
    """Load a model from a ``module:attribute`` reference.

    The attribute may be a ``Model`` or a callable returning one. When
    ``search_path`` is given it is importable for the duration of the call
    only.

    Raises:
        ValueError: If the reference is malformed or does not yield a Model
    """
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Model reference must look like 'module:attribute', got '{reference}'")

    added_path = None
    if search_path is not None and str(search_path) not in sys.path:
        added_path = str(search_path)
        sys.path.insert(0, added_path)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_name}': {e}") from e
    finally:
        if added_path is not None and added_path in sys.path:
            sys.path.remove(added_path)

    target = module
    for name in attribute.split("."):
        try:
            target = getattr(target, name)
        except AttributeError as e:
            raise ValueError(f"Module '{module_name}' has no attribute '{attribute}'") from e

    if callable(target):
        try:
            model = target()
        except Exception as e:
            raise ValueError(f"Model factory '{reference}' failed: {type(e).__name__}: {e}") from e
    else:
        model = target
    if not isinstance(model, Model):
        raise ValueError(f"'{reference}' did not produce a Model (got {type(model).__name__})")
    return model


@app.command()
def generate(
    model_ref: Annotated[
        str,
        typer.Argument(help="Model to render as 'module:attribute' (a Model or a factory returning one)")
    ],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output directory (default: output.dir from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .rtdiagram.json)")
    ] = None,
    emit_guards: Annotated[
        bool,
        typer.Option("--emit-guards", help="Append transition guards to state machine labels")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Generate class, composition and state machine diagrams for a model."""
    try:
        rtdiagram_config = load_config(config)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if emit_guards:
        rtdiagram_config.diagrams.emit_guards = True

    _setup_logging(rtdiagram_config, verbose)

    try:
        model = load_model(model_ref, search_path=Path.cwd())
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    output_dir = out or Path(rtdiagram_config.output.dir)

    try:
        generator = DiagramGenerator(model, output_dir, config=rtdiagram_config)
        generated = generator.generate()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    except InternalConsistencyError as e:
        console.print(f"[red]Internal error:[/red] {e}")
        console.print("[dim]Partial output may remain in the output directory[/dim]")
        raise typer.Exit(1)

    if not generated:
        console.print(f"[yellow]Nothing generated:[/yellow] model '{model.name}' has no capsules")
        raise typer.Exit(EXIT_NOTHING_GENERATED)

    table = Table(title=f"Diagrams for {model.name}")
    table.add_column("Kind", style="cyan")
    table.add_column("Title")
    table.add_column("Path", style="dim")
    for document in generator.documents:
        try:
            shown = document.path.relative_to(generator.output_dir)
        except ValueError:
            shown = document.path
        table.add_row(document.kind.value, document.title, str(shown))

    console.print(table)
    console.print(f"[green]OK[/green] {len(generator.documents)} documents written to {generator.output_dir}")


@app.command("reflow")
def reflow_command(
    file: Annotated[
        Path,
        typer.Argument(help="PlantUML source to re-indent")
    ],
    in_place: Annotated[
        bool,
        typer.Option("--in-place", "-i", help="Rewrite the file instead of printing it")
    ] = False,
    indent: Annotated[
        str,
        typer.Option("--indent", help="Indentation unit (default: tab)")
    ] = "\t",
) -> None:
    """Re-indent an existing diagram source by brace depth."""
    try:
        DiagramsConfig(indent=indent)
    except ValidationError:
        console.print(f"[red]Error:[/red] --indent must be a non-empty whitespace string, got {indent!r}")
        raise typer.Exit(1)

    if not file.is_file():
        console.print(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)

    try:
        result = reflow(file.read_text(encoding="utf-8"), indent)
    except InternalConsistencyError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if in_place:
        file.write_text(result + "\n", encoding="utf-8")
        console.print(f"[green]Reflowed:[/green] {file}")
    else:
        typer.echo(result)


if __name__ == "__main__":
    app()
