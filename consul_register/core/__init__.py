"""Core infrastructure for loading, applying and exporting actions."""

from .context import ApplyContext
from .options import ApplyOptions, ExportOptions
from .reporter import Reporter, NullReporter
from .loader import dump_actions, dumps_actions, load_actions, load_actions_file
from .pipeline import run_pipeline, validate_actions
from .export import export_actions

__all__ = [
    "ApplyContext",
    "ApplyOptions",
    "ExportOptions",
    "Reporter",
    "NullReporter",
    "dump_actions",
    "dumps_actions",
    "load_actions",
    "load_actions_file",
    "run_pipeline",
    "validate_actions",
    "export_actions",
]
