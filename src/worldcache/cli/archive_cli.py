"""Command-line interface for inspecting backup archives."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from worldcache.archive import BackupArchive, list_backups

app = typer.Typer(help="Tools for inspecting backup archives")
console = Console()


@app.command("list")
def list_archives(
    directory: Path = typer.Argument(..., help="Directory holding the archives"),
    world: Optional[str] = typer.Option(None, "--world", "-w", help="Only show archives of this world"),
):
    """List backup archives, newest first."""
    if not directory.is_dir():
        console.print(f"[bold red]Error:[/bold red] {directory} is not a directory")
        raise typer.Exit(1)

    archives = list_backups(str(directory), world=world)
    if not archives:
        console.print("No archives found.")
        return

    table = Table(title=f"Archives in {directory}")
    table.add_column("Name", style="cyan")
    table.add_column("Size (KB)", style="magenta")
    table.add_column("Modified", style="green")

    for path in archives:
        stat = path.stat()
        table.add_row(
            path.name,
            str(stat.st_size // 1024),
            datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S"),
        )

    console.print(table)


@app.command("info")
def archive_info(
    archive_path: Path = typer.Argument(..., help="Path to the archive zip file"),
    verify: bool = typer.Option(False, "--verify", help="Check the CRC of every member"),
):
    """Display basic information about an archive file."""
    try:
        archive = BackupArchive(str(archive_path))
        stats = archive.stats()
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"[bold]Archive:[/bold] {archive_path}")
    console.print(f"[bold]Worlds:[/bold] {', '.join(stats['roots']) or '-'}")
    console.print(f"[bold]Files:[/bold] {stats['files']}")
    console.print(f"[bold]Directories:[/bold] {stats['directories']}")
    console.print(f"[bold]Size:[/bold] {stats['archive_size'] // 1024} KB "
                  f"({stats['uncompressed_size'] // 1024} KB uncompressed)")
    console.print(f"[bold]Modified:[/bold] {stats['modified'].strftime('%Y-%m-%d %H:%M:%S')}")

    if verify:
        bad_member = archive.verify()
        if bad_member is not None:
            console.print(f"[bold red]Corrupt member:[/bold red] {bad_member}")
            raise typer.Exit(1)
        console.print("[bold green]Archive verified[/bold green]")
