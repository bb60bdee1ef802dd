"""
Module: notification_sync.py
Description:
    Applies the target email-notification mask to every user, one request at
    a time, and records one UpdateResult per user.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    The endpoint and payload shape depend on the service revision:
        * legacy   → PUT  /user/{id}
        * settings → POST /user/{id}/settings/notifications
"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from tqdm import tqdm

from syncer.mask_codec import population_count
from syncer.models import Outcome, RemoteUser, UpdateResult
from syncer.seerr_client import SeerrClient

console = Console()


def build_update(user: RemoteUser, target_mask: int, revision: str) -> tuple[str, str, dict]:
    """Return (method, endpoint, body) that sets the user's email mask."""
    if revision == "legacy":
        return (
            "PUT",
            f"/user/{user.id}",
            {
                "email": user.email,
                "settings": {"notificationTypes": {"email": target_mask}},
            },
        )
    if revision == "settings":
        return (
            "POST",
            f"/user/{user.id}/settings/notifications",
            {"emailEnabled": True, "notificationTypes": {"email": target_mask}},
        )
    raise ValueError(f"Unknown API revision: {revision}")


def run(
    client: SeerrClient,
    users: Sequence[RemoteUser],
    target_mask: int,
    dry_run: bool,
    verbose: bool = False,
    revision: str = "settings",
) -> list[UpdateResult]:
    """
    Push `target_mask` to each user in order.

    A failed user is recorded as FAIL and the loop moves on; nothing here
    aborts the run.
    """
    permission_count = population_count(target_mask)
    results: list[UpdateResult] = []
    tag = "[yellow][TEST][/yellow] " if dry_run else ""

    iterator = users if verbose else tqdm(users, desc="📨 Updating users", unit="user")
    for user in iterator:
        method, endpoint, body = build_update(user, target_mask, revision)
        response = client.call(endpoint, method, body, dry_run=dry_run)

        if response.ok:
            results.append(
                UpdateResult(user.id, user.email, target_mask, permission_count, Outcome.OK)
            )
            if verbose:
                console.print(
                    f"{tag}[green]✅ {user.email or user.id}[/green] "
                    f"[dim](id {user.id}, mask {target_mask})[/dim]"
                )
        else:
            results.append(
                UpdateResult(
                    user.id,
                    user.email,
                    target_mask,
                    permission_count,
                    Outcome.FAIL,
                    error=str(response.error),
                )
            )
            if verbose:
                console.print(
                    f"{tag}[red]❌ {user.email or user.id}[/red] [dim]{escape(str(response.error))}[/dim]"
                )

    return results
