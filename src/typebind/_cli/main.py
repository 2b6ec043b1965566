import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from typebind._canonical import canonicalize
from typebind._emit import BACKENDS, Backend, EmittedUnit, GoBackend, TypeScriptBackend, generate, snake_case
from typebind._errors import TypebindError
from typebind._ir import DiscriminatedUnion, Record, TypeShape
from typebind._resolve import ResolvedLibrary, resolve
from typebind._schema import load_schema

from .config import ConfigError, TypebindConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Typebind CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> TypebindConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _schema_path(schema: Path | None, config: TypebindConfig) -> Path:
    if schema is None:
        if config.schema is None:
            msg = (
                "No schema specified. "
                "Provide a SCHEMA argument or configure [tool.typebind].schema in pyproject.toml."
            )
            raise typer.BadParameter(msg)
        schema = config.schema

    # Verify schema file exists
    if not schema.is_file():
        err_console.print(f"[red]✗ Schema file not found: {escape(str(schema))}[/red]")
        raise typer.Exit(code=1)
    return schema


def _load_and_resolve(schema_path: Path) -> ResolvedLibrary:
    """Read, canonicalize and resolve a schema, exiting with code 1 on failure."""
    err_console.print(f"[cyan]Loading schema from:[/cyan] {schema_path}")
    try:
        library = load_schema(schema_path)
        resolved = resolve(canonicalize(library))
    except TypebindError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    return resolved


def _shape_kind(shape: TypeShape) -> str:
    match shape:
        case Record():
            return "record"
        case DiscriminatedUnion():
            return "union"
        case _:
            return type(shape).__name__.lower()


@app.command("generate")
def generate_command(
    schema: Annotated[
        Path | None,
        typer.Argument(help="Path to the JSON schema file"),
    ] = None,
    *,
    ts_out: Annotated[
        Path | None,
        typer.Option("--ts-out", help="TypeScript output directory"),
    ] = None,
    go_out: Annotated[
        Path | None,
        typer.Option("--go-out", help="Go output directory"),
    ] = None,
    go_package: Annotated[
        str | None,
        typer.Option("--go-package", help="Go package name (defaults to the output directory name)"),
    ] = None,
) -> None:
    """Generate type declarations from a schema."""
    config = _load_config()
    schema_path = _schema_path(schema, config)
    ts_out = ts_out or config.ts_out
    go_out = go_out or config.go_out

    targets: list[tuple[Backend, Path]] = []
    if ts_out is not None:
        targets.append((TypeScriptBackend(), ts_out))
    if go_out is not None:
        package = go_package or config.go_package or snake_case(go_out.resolve().name)
        targets.append((GoBackend(package_name=package), go_out))
    if not targets:
        msg = "No output requested. Provide --ts-out and/or --go-out."
        raise typer.BadParameter(msg)

    err_console.print()
    err_console.print(f"[cyan]Loading schema from:[/cyan] {schema_path}")

    # Every backend runs in memory before anything is written
    try:
        outputs = generate(load_schema(schema_path), [backend for backend, _ in targets])
    except TypebindError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    for backend, out_dir in targets:
        _write_units(outputs[backend.tag], out_dir)

    err_console.print()
    err_console.print("[green]✓ Generation complete[/green]")
    err_console.print()


def _write_units(units: list[EmittedUnit], out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    for unit in units:
        path = out_dir / unit.identifier
        err_console.print(f"[cyan]Writing:[/cyan] {path}")
        path.write_text(unit.source, encoding="utf-8")
        logger.debug(f"Wrote {len(unit.source)} characters to {path}")


@app.command()
def check(
    schema: Annotated[
        Path | None,
        typer.Argument(help="Path to the JSON schema file"),
    ] = None,
) -> None:
    """Check that a schema builds and all its references resolve."""
    config = _load_config()
    err_console.print()
    resolved = _load_and_resolve(_schema_path(schema, config))
    err_console.print()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Declaration", style="bold")
    table.add_column("Kind")
    table.add_column("References", style="yellow")
    table.add_column("Recursive", justify="center")

    for decl in resolved.declarations:
        refs = ", ".join(sorted(resolved.graph.references(decl.name)))
        recursive = "[magenta]yes[/magenta]" if resolved.graph.is_recursive(decl.name) else ""
        table.add_row(escape(decl.name), _shape_kind(decl.shape), escape(refs), recursive)

    err_console.print(
        Panel(
            table,
            title=f"[bold]Schema: {escape(resolved.namespace)}[/bold]",
            subtitle=f"[dim]{len(resolved.declarations)} declarations[/dim]",
            border_style="cyan",
        ),
    )

    err_console.print()
    err_console.print("[green]✓ Schema is valid[/green]")
    err_console.print()


@app.command()
def show(
    schema: Annotated[
        Path | None,
        typer.Argument(help="Path to the JSON schema file"),
    ] = None,
    *,
    target: Annotated[
        str,
        typer.Option("-t", "--target", help=f"Target to print ({', '.join(BACKENDS)})"),
    ] = TypeScriptBackend.tag,
) -> None:
    """Print the generated source for one target to stdout."""
    if target not in BACKENDS:
        msg = f"Unknown target '{target}'. Expected one of: {', '.join(BACKENDS)}"
        raise typer.BadParameter(msg)

    config = _load_config()
    resolved = _load_and_resolve(_schema_path(schema, config))
    backend = BACKENDS[target]()
    try:
        units = backend.emit(resolved)
    except TypebindError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    for unit in units:
        typer.echo(unit.source, nl=False)


def main() -> None:
    app()
