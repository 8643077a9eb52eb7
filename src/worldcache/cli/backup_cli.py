"""Command-line interface for running backups."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from worldcache.backup import BackupUnit
from worldcache.cache.registry import CacheRegistry
from worldcache.core.config import get_settings

logger = logging.getLogger(__name__)

app = typer.Typer(help="Create backup archives of world directories")
console = Console()


@app.command("run")
def run_backup(
    worlds: Optional[List[Path]] = typer.Argument(None, help="World directories (defaults to WORLDCACHE_WORLDS)"),
    force: bool = typer.Option(False, "--force", "-f", help="Rebuild the cache even if it is still fresh"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for archives (defaults to WORLDCACHE_BACKUP_DIR)"),
):
    """Archive every world once and rotate old archives."""
    settings = get_settings()
    registry = CacheRegistry.from_settings(settings, worlds=[str(w) for w in worlds] if worlds else None)
    unit = BackupUnit(registry, output or settings.backup_dir, force=force or settings.force)

    try:
        results = unit.run()
    finally:
        registry.shutdown()

    table = Table(title="Backup results")
    table.add_column("World", style="cyan")
    table.add_column("Result")
    for world_name, ok in results.items():
        table.add_row(world_name, "[green]ok[/green]" if ok else "[red]failed[/red]")
    console.print(table)

    if not results or not all(results.values()):
        raise typer.Exit(1)
