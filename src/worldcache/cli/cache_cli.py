"""Command-line interface for inspecting and managing world caches."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from worldcache.cache.registry import CacheRegistry
from worldcache.core.config import get_settings

app = typer.Typer(help="Inspect and manage world caches")
console = Console()


def _format_age(seconds: Optional[float]) -> str:
    if seconds is None:
        return "-"
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:d}:{minutes:02d}:{secs:02d}"


@app.command("status")
def cache_status(
    worlds: Optional[List[Path]] = typer.Argument(None, help="World directories (defaults to WORLDCACHE_WORLDS)"),
):
    """Show state, age and location of each world's cache."""
    settings = get_settings()
    registry = CacheRegistry.from_settings(settings, worlds=[str(w) for w in worlds] if worlds else None)

    table = Table(title="Caches")
    table.add_column("World", style="cyan")
    table.add_column("State")
    table.add_column("Age", style="green")
    table.add_column("Obsolete", style="yellow")
    table.add_column("Path")

    for world_name in registry.worlds():
        controller = registry.get(world_name)
        table.add_row(
            world_name,
            controller.state.value,
            _format_age(controller.cache_age()),
            "yes" if controller.is_cache_obsolete() else "no",
            str(controller.cache),
        )

    console.print(table)


@app.command("rebuild")
def cache_rebuild(
    world: Path = typer.Argument(..., help="World directory"),
):
    """Force a rebuild of one world's cache."""
    registry = CacheRegistry.from_settings(get_settings(), worlds=[str(world)])
    try:
        controller = registry.get(registry.worlds()[0])
        cache = controller.get_cache(force=True)
    finally:
        registry.shutdown()

    if cache is None:
        console.print(f"[bold red]Error:[/bold red] cache for {world} couldn't be rebuilt")
        raise typer.Exit(1)
    console.print(f"[bold green]Cache rebuilt:[/bold green] {cache}")


@app.command("clear")
def cache_clear(
    world: Path = typer.Argument(..., help="World directory"),
):
    """Delete one world's cache."""
    registry = CacheRegistry.from_settings(get_settings(), worlds=[str(world)])
    controller = registry.get(registry.worlds()[0])

    if not controller.delete_cache():
        console.print(f"[bold red]Error:[/bold red] failed to delete {controller.cache}")
        raise typer.Exit(1)
    console.print(f"[bold green]Cache cleared:[/bold green] {controller.cache}")
