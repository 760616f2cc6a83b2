"""CLI interface for kinship-graph."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import EngineConfig
from .engine import FamilyTreeEngine
from .exceptions import KinshipGraphError
from .export import EXPORT_FORMATS, to_mermaid
from .logging import configure_logging
from .notes import load_notes
from .store import PersonStore

app = typer.Typer(
    name="kinship-graph",
    help="Family relationship graph resolution and layout",
    add_completion=False,
)
console = Console()


def get_config() -> EngineConfig:
    """Load configuration from environment (and .env when present)."""
    from dotenv import load_dotenv

    load_dotenv()
    return EngineConfig()


def _load_store(notes_file: Path) -> PersonStore:
    if not notes_file.exists():
        console.print(f"[red]Error: File not found: {notes_file}[/red]")
        raise typer.Exit(1)
    try:
        notes = json.loads(notes_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: invalid JSON in {notes_file}: {e}[/red]")
        raise typer.Exit(1)
    if not isinstance(notes, list):
        console.print(f"[red]Error: expected a list of notes in {notes_file}[/red]")
        raise typer.Exit(1)

    people, trees = load_notes(notes)
    return PersonStore(people, trees)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
):
    """Family relationship graph resolution and layout."""
    level = (log_level or get_config().log_level).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        console.print(f"[red]Error: unknown log level {level}[/red]")
        raise typer.Exit(1)
    configure_logging(level)


@app.command()
def people(
    notes_file: Path = typer.Argument(..., help="JSON file with a list of {id, content} notes"),
    search: str = typer.Option("", "--search", "-s", help="Filter people by name"),
):
    """List the people in a notebook."""
    store = _load_store(notes_file)
    matches = store.search(search)

    if not matches:
        console.print(f'[yellow]No people found matching "{search}"[/yellow]')
        return

    table = Table(title="People")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Relationships", justify="right")
    table.add_column("Photo")
    for person in matches:
        table.add_row(
            person.id,
            person.name,
            str(len(person.declared_relationships)),
            person.primary_photo or "-",
        )
    console.print(table)


@app.command()
def trees(
    notes_file: Path = typer.Argument(..., help="JSON file with a list of {id, content} notes"),
):
    """List the saved family trees in a notebook."""
    store = _load_store(notes_file)
    saved = store.trees()

    if not saved:
        console.print("[yellow]No family trees yet.[/yellow]")
        return

    table = Table(title="Family Trees")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Root")
    for tree in saved:
        root = store.get(tree.root_person_id)
        table.add_row(tree.id, tree.name, root.name if root else f"[red]missing ({tree.root_person_id})[/red]")
    console.print(table)


@app.command()
def layout(
    notes_file: Path = typer.Argument(..., help="JSON file with a list of {id, content} notes"),
    root: str = typer.Option(None, "--root", "-r", help="Root person id"),
    tree: str = typer.Option(None, "--tree", "-t", help="Saved family tree id"),
    focus: str = typer.Option(None, "--focus", "-f", help="Person id to highlight"),
    fmt: str = typer.Option("json", "--format", help="Export format: json or mermaid"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the export to this file"),
):
    """Compute the positioned family graph for a root person."""
    if fmt not in EXPORT_FORMATS:
        console.print(f"[red]Error: unknown format {fmt}. Use json or mermaid.[/red]")
        raise typer.Exit(1)

    store = _load_store(notes_file)

    if tree:
        try:
            root = store.get_tree(tree).root_person_id
        except KinshipGraphError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
    if not root:
        console.print("[red]Error: pass --root or --tree[/red]")
        raise typer.Exit(1)

    engine = FamilyTreeEngine(get_config())
    graph = engine.compute(store.snapshot(), root_id=root, selected_id=focus)

    if graph.is_empty:
        console.print(Panel(f"No family tree to show for root [bold]{root}[/bold].", title="Empty"))
        return

    if output:
        EXPORT_FORMATS[fmt](graph, output)
        console.print(f"[green]Layout saved to {output}[/green]")
        return

    if fmt == "mermaid":
        console.print(to_mermaid(graph), markup=False, highlight=False, soft_wrap=True)
    else:
        _display_layout(store, graph)


def _display_layout(store: PersonStore, graph) -> None:
    table = Table(title=f"Layout for {graph.root_id}")
    table.add_column("Person")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("State")
    for node in graph.nodes:
        flags = node.flags
        state = (
            "root" if flags.is_root and not (flags.is_selected or flags.is_dimmed)
            else "selected" if flags.is_selected
            else "highlighted" if flags.is_highlighted
            else "dimmed" if flags.is_dimmed
            else ""
        )
        table.add_row(node.person.name, f"{node.position.x:g}", f"{node.position.y:g}", state)
    console.print(table)

    edges = Table(title="Edges")
    edges.add_column("From")
    edges.add_column("To")
    edges.add_column("Label")
    for edge in graph.edges:
        source = store.get(edge.source_id)
        target = store.get(edge.target_id)
        edges.add_row(
            source.name if source else edge.source_id,
            target.name if target else edge.target_id,
            edge.label,
        )
    console.print(edges)


if __name__ == "__main__":
    app()
