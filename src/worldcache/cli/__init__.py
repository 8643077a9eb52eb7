"""
Initialize the CLI package. Contains the typer sub-apps for backups, caches and archives.
"""
