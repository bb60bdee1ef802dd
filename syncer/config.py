"""
Module: config.py
Description:
    Builds the immutable run configuration from `.env` and the environment.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * SEERR_URL
        * SEERR_API_KEY
        * SEERR_API_REVISION (settings | legacy, default: settings)
        * NOTIFICATION_FLAGS (Name=bit list, overrides the revision table)
        * DEFAULT_FLAGS (comma list, default: every flag)
        * DEFAULT_TEST_MODE (default: true)
        * DEFAULT_VERBOSE (default: false)
        * PAGE_SIZE (default: 50)
        * REQUEST_TIMEOUT (seconds, default: 10)
        * PROMPT_TIMEOUT (seconds, default: 30)
        * OUTPUT_DIR (default: output)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from syncer.errors import ConfigError
from syncer.mask_codec import FlagTable
from utils.env import env_flag, validate_env_vars

REQUIRED_ENV_VARS = ["SEERR_URL", "SEERR_API_KEY"]

base_path = Path(__file__).resolve().parent
env_path = base_path.parent / ".env"


@dataclass(frozen=True)
class SeerrConfig:
    url: str
    api_key: str
    revision: str
    flag_table: FlagTable
    default_flags: tuple[str, ...]
    default_test_mode: bool = True
    default_verbose: bool = False
    page_size: int = 50
    request_timeout: float = 10.0
    prompt_timeout: float = 30.0
    output_dir: Path = Path("output")

    @property
    def api_base(self) -> str:
        url = self.url.rstrip("/")
        if url.endswith("/api/v1"):
            return url
        return f"{url}/api/v1"


def _number(environ: Mapping[str, str], name: str, default, cast):
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got '{raw}'")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_config(environ: Mapping[str, str] | None = None) -> SeerrConfig:
    """
    Validate and freeze the configuration.

    When `environ` is omitted, `.env` next to the project root is loaded into
    the process environment first (existing variables win).
    """
    if environ is None:
        load_dotenv(dotenv_path=env_path)
        environ = os.environ

    validate_env_vars(REQUIRED_ENV_VARS, environ)

    revision = (environ.get("SEERR_API_REVISION") or "settings").strip().lower()
    flag_table = FlagTable.for_revision(revision)
    custom_flags = (environ.get("NOTIFICATION_FLAGS") or "").strip()
    if custom_flags:
        flag_table = FlagTable.parse(custom_flags)

    raw_defaults = (environ.get("DEFAULT_FLAGS") or "").strip()
    if raw_defaults:
        default_flags = tuple(f.strip() for f in raw_defaults.split(",") if f.strip())
        unknown = [f for f in default_flags if f not in flag_table]
        if unknown:
            raise ConfigError(f"DEFAULT_FLAGS references unknown flags: {', '.join(unknown)}")
    else:
        default_flags = tuple(flag_table)

    return SeerrConfig(
        url=environ["SEERR_URL"].strip(),
        api_key=environ["SEERR_API_KEY"].strip(),
        revision=revision,
        flag_table=flag_table,
        default_flags=default_flags,
        default_test_mode=env_flag(environ.get("DEFAULT_TEST_MODE"), default=True),
        default_verbose=env_flag(environ.get("DEFAULT_VERBOSE"), default=False),
        page_size=_number(environ, "PAGE_SIZE", 50, int),
        request_timeout=_number(environ, "REQUEST_TIMEOUT", 10.0, float),
        prompt_timeout=_number(environ, "PROMPT_TIMEOUT", 30.0, float),
        output_dir=Path((environ.get("OUTPUT_DIR") or "output").strip()),
    )
