import os
from rich.console import Console

from syncer.errors import ConfigError

console = Console()


def validate_env_vars(required_vars, environ=None):
    """Ensure all required environment variables are set and non-empty."""
    environ = os.environ if environ is None else environ
    missing = [var for var in required_vars if not (environ.get(var) or "").strip()]
    if missing:
        console.print(
            f"[bold red]❌ Missing required environment variables: {', '.join(missing)}[/bold red]"
        )
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")


def env_flag(value, default=False):
    """Interpret 'true'/'yes'/'1' style strings from .env."""
    if value is None or not str(value).strip():
        return default
    return str(value).strip().lower() in ("1", "true", "yes", "y", "on")
