"""
Module: main.py
Description:
    Interactive entry point: asks the operator how to run, fetches every user,
    pushes the email-notification mask and prints the final report.

Usage:
    python cli.py notifications sync

Notes:
    Reads configuration from `.env` (see `syncer/config.py`).
    - Required/used env vars:
        * SEERR_URL
        * SEERR_API_KEY
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich.console import Console
from rich.markup import escape

from syncer import notification_sync
from syncer.config import SeerrConfig, load_config
from syncer.errors import ConfigError, EnumerationFailure
from syncer.mask_codec import encode, population_count
from syncer.models import RunSummary
from syncer.reporter import (
    print_summary,
    render_legend,
    render_results,
    summarize,
    write_failures_csv,
)
from syncer.seerr_client import SeerrClient
from syncer.user_fetcher import fetch_all_users
from utils.prompt import ask_yes_no

console = Console()

Ask = Callable[[str, bool, float], bool]


@dataclass(frozen=True)
class RunOptions:
    flags: tuple[str, ...]
    mask: int
    test_mode: bool
    verbose: bool
    confirmed: bool


def choose_flags(config: SeerrConfig, ask: Ask) -> tuple[str, ...]:
    defaults = ", ".join(config.default_flags) or "none"
    if ask(f"Use the default notification set ({defaults})?", True, config.prompt_timeout):
        return config.default_flags

    selected = []
    for name in config.flag_table:
        if ask(f"  Enable '{name}' emails?", name in config.default_flags, config.prompt_timeout):
            selected.append(name)
    return tuple(selected)


def configure_run(config: SeerrConfig, ask: Ask = ask_yes_no) -> RunOptions:
    """Collect the operator's choices; every prompt has a default and a timeout."""
    flags = choose_flags(config, ask)
    mask = encode(flags, config.flag_table)

    console.print(render_legend(config.flag_table, mask))
    if mask == 0:
        console.print("[yellow]⚠️  No flags selected: email notifications will be disabled.[/yellow]")

    test_mode = ask(
        "Run in test mode (no changes are sent)?", config.default_test_mode, config.prompt_timeout
    )
    verbose = ask("Show per-user output?", config.default_verbose, config.prompt_timeout)

    mode = "[yellow]TEST[/yellow]" if test_mode else "[bold red]LIVE[/bold red]"
    enabled = ", ".join(flags) or "none"
    console.print(
        f"\n[bold white]Target mask:[/bold white] {mask} "
        f"[dim]({population_count(mask)} flag(s): {enabled})[/dim] | {mode}"
    )
    confirmed = ask("Proceed?", True, config.prompt_timeout)
    return RunOptions(flags, mask, test_mode, verbose, confirmed)


def execute(config: SeerrConfig, options: RunOptions, client: SeerrClient) -> RunSummary:
    """Fetch the population, apply the mask and report. Raises EnumerationFailure."""
    version = client.check_status()
    if version:
        console.print(f"[dim]🔗 Connected to Seerr {version}[/dim]")

    console.rule("[cyan]Fetching users")
    users = fetch_all_users(client, dry_run=options.test_mode, page_size=config.page_size)
    if not users:
        raise EnumerationFailure("No usable user population retrieved from the service")
    console.print(f"[bold magenta]📦 Loaded {len(users)} users[/bold magenta]")

    console.rule("[cyan]Updating notification settings")
    results = notification_sync.run(
        client,
        users,
        options.mask,
        dry_run=options.test_mode,
        verbose=options.verbose,
        revision=config.revision,
    )

    summary = summarize(results, test_mode=options.test_mode)
    if options.verbose or summary.failure_count:
        console.print(render_results(results))

    print_summary(summary)

    try:
        csv_path = write_failures_csv(results, config.output_dir / "failed_updates.csv")
    except OSError as e:
        console.print(f"[yellow]⚠️  Could not save failed updates: {escape(str(e))}[/yellow]")
    else:
        if csv_path:
            console.print(f"[dim]📁 Failed updates saved: {csv_path}[/dim]")
    return summary


def main(
    config: SeerrConfig | None = None,
    ask: Ask | None = None,
    client: SeerrClient | None = None,
) -> int:
    """Run the whole flow and return the process exit status."""
    console.print("[bold white]\n📬 Seerr | Email Notification Sync[/bold white]\n")

    try:
        config = config or load_config()
    except ConfigError as e:
        console.print(f"[bold red]❌ Configuration error:[/bold red] {e}")
        return 1

    try:
        options = configure_run(config, ask or ask_yes_no)
        if not options.confirmed:
            console.print("[yellow]🚫 Cancelled. No changes were made.[/yellow]")
            return 0

        client = client or SeerrClient(config, verbose=options.verbose)
        return execute(config, options, client).exit_code

    except EnumerationFailure as e:
        console.print(f"[bold red]❌ {e}. Nothing was updated.[/bold red]")
        return 1
    except Exception as e:
        console.print(f"[bold red]❌ Unexpected error: {e.__class__.__name__} - {e}[/bold red]")
        console.print_exception()
        return 1
