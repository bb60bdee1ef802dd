"""
Module: reporter.py
Description:
    Turns the per-user UpdateResult list into a RunSummary and renders the
    legend, the per-user table and the final counts.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Mapping, Sequence

from rich.console import Console
from rich.table import Table

from syncer.mask_codec import decode
from syncer.models import Outcome, RunSummary, UpdateResult

console = Console()


def summarize(results: Sequence[UpdateResult], test_mode: bool) -> RunSummary:
    success = sum(1 for r in results if r.outcome is Outcome.OK)
    return RunSummary(
        total_users=len(results),
        success_count=success,
        failure_count=len(results) - success,
        test_mode=test_mode,
    )


def render_legend(flag_table: Mapping[str, int], mask: int) -> Table:
    table = Table(title=f"Email notifications (mask {mask})")
    table.add_column("Flag", style="cyan")
    table.add_column("Bit", justify="right")
    table.add_column("Enabled", justify="center")
    enabled = set(decode(mask, flag_table))
    for name, bit in flag_table.items():
        table.add_row(name, str(bit), "✅" if name in enabled else "-")
    return table


def render_results(results: Sequence[UpdateResult]) -> Table:
    table = Table(title="Per-user results")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Email")
    table.add_column("Mask", justify="right")
    table.add_column("Flags", justify="right")
    table.add_column("Result", justify="center")
    for r in results:
        outcome = "[green]OK[/green]" if r.ok else "[red]FAIL[/red]"
        table.add_row(str(r.user_id), r.email, str(r.target_mask), str(r.permission_count), outcome)
    return table


def print_summary(summary: RunSummary) -> None:
    mode = "[yellow]TEST MODE – no changes sent[/yellow]" if summary.test_mode else "[bold]LIVE[/bold]"
    console.print("\n[bold white]📊 Final Report[/bold white]")
    console.print(f"[dim]Mode:[/dim] {mode}")
    console.print(f"[bold cyan]👥 Users processed: {summary.total_users}[/bold cyan]")
    console.print(f"[bold green]✅ Updated: {summary.success_count}[/bold green]")
    if summary.failure_count:
        console.print(f"[bold red]❌ Failed: {summary.failure_count}[/bold red]\n")
    else:
        console.print("[bold green]🎉 No failures.[/bold green]\n")


def write_failures_csv(results: Sequence[UpdateResult], path: Path) -> Path | None:
    """Write FAIL rows to `path`; returns the path, or None when nothing failed."""
    failed = [r for r in results if not r.ok]
    if not failed:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=["User ID", "Email", "Mask", "Error"])
        writer.writeheader()
        writer.writerows(
            {"User ID": r.user_id, "Email": r.email, "Mask": r.target_mask, "Error": r.error or ""}
            for r in failed
        )
    return path
