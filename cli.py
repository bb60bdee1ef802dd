"""
Module: cli.py
Description:
    Typer-based command-line interface for the Seerr email-notification sync.

Usage:
    python cli.py [subcommand]

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * SEERR_URL
        * SEERR_API_KEY
    - Run options (flags, test mode, verbosity) are asked interactively, not passed as options.
"""

import typer
from rich.console import Console

console = Console()

app = typer.Typer(help="SeerrNotify CLI – bulk email-notification settings for Overseerr/Jellyseerr.")

# === Sub-apps ===
notifications_app = typer.Typer(help="Commands related to user email-notification settings.")

app.add_typer(notifications_app, name="notifications")


# === NOTIFICATION COMMANDS ===
@notifications_app.command("sync")
def sync_notifications():
    """
    Apply one email-notification mask to every user.
    Prompts for the flag set, test mode, verbosity and a final confirmation.
    """
    from syncer.main import main as run_sync

    raise typer.Exit(code=run_sync())


@notifications_app.command("flags")
def show_flags():
    """Print the configured flag → bit table and the default mask."""
    from syncer.config import load_config
    from syncer.errors import ConfigError
    from syncer.mask_codec import encode
    from syncer.reporter import render_legend

    try:
        config = load_config()
    except ConfigError as e:
        console.print(f"[bold red]❌ Configuration error:[/bold red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[dim]API revision:[/dim] {config.revision}")
    console.print(render_legend(config.flag_table, encode(config.default_flags, config.flag_table)))


# === ENTRY POINT ===
if __name__ == "__main__":
    app()
