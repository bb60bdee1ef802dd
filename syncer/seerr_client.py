"""
Module: seerr_client.py
Description:
    Thin REST client for the Overseerr/Jellyseerr API with a test-mode branch
    that simulates every write call.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Configuration comes from `SeerrConfig` (see `syncer/config.py`).
    - Every request carries `X-Api-Key` and `Content-Type: application/json`.
    - No retries: a failed call is reported once and left to the caller.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import requests
from rich.console import Console
from rich.markup import escape

from syncer.config import SeerrConfig
from syncer.errors import ApiError, TransportError

console = Console()

METHODS = ("GET", "POST", "PUT")


@dataclass(frozen=True)
class ApiResult:
    ok: bool
    data: Any = None
    error: ApiError | TransportError | None = None
    simulated: bool = False


class SeerrClient:
    """Client for the Overseerr/Jellyseerr `/api/v1` REST API."""

    def __init__(
        self,
        config: SeerrConfig,
        session: requests.Session | None = None,
        verbose: bool = False,
    ):
        self.config = config
        self.verbose = verbose
        self.base_url = config.api_base
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "X-Api-Key": config.api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

    def call(
        self,
        endpoint: str,
        method: str = "GET",
        body: dict | None = None,
        dry_run: bool = False,
    ) -> ApiResult:
        """
        Issue one request and wrap the outcome.

        Reads always go out, even in test mode, so the simulation runs against
        the real user population. Writes in test mode are answered with a
        synthetic success instead of being sent (and logged when verbose).
        """
        method = method.upper()
        if method not in METHODS:
            return ApiResult(
                ok=False, error=ApiError(method, endpoint, body=f"unsupported method {method}")
            )

        if dry_run and method != "GET":
            if self.verbose:
                payload = escape(json.dumps(body)) if body is not None else "-"
                console.log(f"[yellow][TEST][/yellow] Would send {method} {endpoint} {payload}")
            return ApiResult(ok=True, data={"success": True}, simulated=True)

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self.session.request(
                method,
                url,
                data=json.dumps(body) if body is not None else None,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            return ApiResult(ok=False, error=TransportError(method, endpoint, str(e)))

        if not 200 <= response.status_code < 300:
            return ApiResult(
                ok=False,
                error=ApiError(method, endpoint, response.status_code, response.text),
            )

        if not response.content:
            return ApiResult(ok=True, data={})
        try:
            return ApiResult(ok=True, data=response.json())
        except ValueError:
            return ApiResult(
                ok=False,
                error=ApiError(method, endpoint, response.status_code, response.text),
            )

    def check_status(self) -> str | None:
        """Return the service version reported by `/status`, or None if unreachable."""
        result = self.call("/status")
        if not result.ok:
            console.print(f"[red]❌ Service check failed: {result.error}[/red]")
            return None
        data = result.data if isinstance(result.data, dict) else {}
        return data.get("version") or "unknown"
