"""CLI commands."""

from .apply import apply_command
from .config import config_command
from .export import export_command

__all__ = ["apply_command", "config_command", "export_command"]
