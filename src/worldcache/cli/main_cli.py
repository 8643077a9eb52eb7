"""
Top-level CLI that aggregates sub-apps from backup_cli, cache_cli and archive_cli.
"""

import logging
from typing import Optional

import typer

from worldcache.cli.archive_cli import app as archive_app
from worldcache.cli.backup_cli import app as backup_app
from worldcache.cli.cache_cli import app as cache_app
from worldcache.core.config import get_settings
from worldcache.core.settings import LOG_FORMAT

main_app = typer.Typer(help="worldcache CLI")

# Add subcommands as Typer sub-apps:
main_app.add_typer(backup_app, name="backup")
main_app.add_typer(cache_app, name="cache")
main_app.add_typer(archive_app, name="archive")


@main_app.callback()
def configure_logging(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (defaults to WORLDCACHE_LOG_LEVEL)"),
):
    """Snapshot live world directories and keep rotating zip backups of them."""
    level_name = (log_level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT
    )


def main():
    main_app()


if __name__ == "__main__":
    main()
