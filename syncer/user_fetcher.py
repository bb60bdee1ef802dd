"""
Module: user_fetcher.py
Description:
    Walks the paginated `/user` listing and returns the complete user set.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Stop order per page: failed call, then empty page, then page count.
    A failed or malformed page discards everything collected so far.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from syncer.models import RemoteUser
from syncer.seerr_client import SeerrClient

console = Console()

PAGE_SIZE = 50


def fetch_all_users(
    client: SeerrClient, dry_run: bool = False, page_size: int = PAGE_SIZE
) -> list[RemoteUser]:
    """
    Fetch every user, page by page, preserving arrival order.

    Returns either the full population or an empty list, never a partial one.
    """
    users: list[RemoteUser] = []
    page = 0

    while True:
        endpoint = f"/user?take={page_size}&skip={page * page_size}"
        result = client.call(endpoint, "GET", dry_run=dry_run)

        if not result.ok:
            console.print(
                f"[bold red]❌ Failed to fetch users (page {page + 1}):[/bold red] {escape(str(result.error))}"
            )
            return []

        data = result.data
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            console.print(f"[bold red]❌ Malformed user page {page + 1}: no results list[/bold red]")
            return []

        batch = data["results"]
        if not batch:
            break

        try:
            users.extend(RemoteUser.from_api(item) for item in batch)
        except (KeyError, TypeError, ValueError) as e:
            console.print(f"[bold red]❌ Malformed user record on page {page + 1}: {e}[/bold red]")
            return []

        console.log(f"Fetched {len(users)} users so far...")

        total_pages = (data.get("pageInfo") or {}).get("pages")
        if isinstance(total_pages, int) and page + 1 >= total_pages:
            break
        page += 1

    return users
