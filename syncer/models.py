"""
Module: models.py
Description:
    Records exchanged between the fetcher, the sync driver and the reporter.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Outcome(str, Enum):
    OK = "OK"
    FAIL = "FAIL"


@dataclass(frozen=True)
class RemoteUser:
    """Read-only snapshot of one account, valid for a single run."""

    id: int
    email: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "RemoteUser":
        return cls(id=int(payload["id"]), email=payload.get("email") or "", raw=payload)


@dataclass(frozen=True)
class UpdateResult:
    user_id: int
    email: str
    target_mask: int
    permission_count: int
    outcome: Outcome
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


@dataclass(frozen=True)
class RunSummary:
    total_users: int
    success_count: int
    failure_count: int
    test_mode: bool

    @property
    def exit_code(self) -> int:
        # Partial success still counts as a failed run.
        return 0 if self.failure_count == 0 else 1
