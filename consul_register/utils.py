"""CLI utilities and decorators."""
import sys
from contextlib import contextmanager
from functools import wraps
from typing import Optional

from rich.markup import escape
from rich.status import Status

from .config import ConfigManager
from .core.exceptions import ActionError
from .sdk import Config, Consul, ConsulError
from .themed_console import ThemedConsole, console, err_console

__all__ = ["console", "err_console", "loading_status", "handle_errors", "build_consul"]


@contextmanager
def loading_status(message: str, success_message: str = "", out: Optional[ThemedConsole] = None):
    """Universal context manager to show loading status."""
    out = out or console
    status = Status(f"[cyan]{message}...[/cyan]", console=out)
    status.start()
    try:
        yield
        if success_message:
            out.success(f"✓ {success_message}")
    finally:
        status.stop()


def handle_errors(func):
    """Decorator to report CLI errors on stderr and exit with status 1."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (ActionError, ConsulError) as e:
            err_console.error(f"Error: {escape(str(e))}")
        except ValueError as e:
            err_console.error(f"Invalid value: {escape(str(e))}")
        except OSError as e:
            err_console.error(f"I/O error: {escape(str(e))}")
        sys.exit(1)
    return wrapper


def build_consul(server: Optional[str] = None, token: Optional[str] = None) -> Consul:
    """Create a client from flags, then environment, then the config file."""
    settings = ConfigManager()
    config = Config.load(
        address=server,
        token=token,
        fallback_address=settings.server,
        fallback_token=settings.token,
    )
    return Consul(config)
