"""Themed console with automatic dark/light detection."""

import configparser
import json
import os
from pathlib import Path
from typing import Dict

from rich.console import Console as RichConsole

FALLBACK_THEMES = {
    "dark": {"success": "green", "error": "red", "warning": "yellow", "info": "cyan", "dim": "dim"},
    "light": {"success": "green", "error": "red", "warning": "yellow", "info": "blue", "dim": "dim"},
}


class ThemedConsole(RichConsole):
    """Console with theme support and semantic color methods."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.themes = self._load_themes()
        self.current_theme_name = self._get_theme_from_config()
        self.theme = self._resolve_theme()

    def _load_themes(self) -> Dict[str, Dict[str, str]]:
        """Load themes from themes.json."""
        themes_file = Path(__file__).parent / "themes.json"
        try:
            with open(themes_file) as f:
                return json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return FALLBACK_THEMES

    def _get_theme_from_config(self) -> str:
        """Get theme from config, default to auto."""
        config_file = Path.home() / ".consul-register" / "config.ini"
        if not config_file.exists():
            return "auto"

        config = configparser.ConfigParser()
        try:
            config.read(config_file)
            return config.get("ui", "theme", fallback="auto")
        except configparser.Error:
            return "auto"

    def _resolve_theme(self) -> Dict[str, str]:
        """Resolve theme name to actual theme dict."""
        name = self.current_theme_name
        if name == "auto":
            name = "dark" if self._is_dark_terminal() else "light"
        return self.themes.get(name, self.themes["dark"])

    def _is_dark_terminal(self) -> bool:
        """Detect if terminal has dark background."""
        # COLORFGBG is set by some terminals, e.g. "15;0"
        colorfgbg = os.environ.get("COLORFGBG", "")
        if ";" in colorfgbg:
            bg = colorfgbg.split(";")[-1]
            if bg.isdigit():
                return int(bg) <= 7

        if os.environ.get("THEME", "").lower() in ["dark", "dracula", "monokai", "nord"]:
            return True

        return False

    def get_styled(self, text: str, style_key: str) -> str:
        """Get styled text without printing."""
        color = self.theme.get(style_key, self.theme.get("dim", "dim"))
        return f"[{color}]{text}[/{color}]"

    def _colorized_print(self, text: str, style_key: str) -> None:
        self.print(self.get_styled(text, style_key), highlight=False, soft_wrap=True)

    # Semantic color methods
    def success(self, text: str) -> None:
        """Print success message."""
        self._colorized_print(text, "success")

    def error(self, text: str) -> None:
        """Print error message."""
        self._colorized_print(text, "error")

    def warning(self, text: str) -> None:
        """Print warning message."""
        self._colorized_print(text, "warning")

    def info(self, text: str) -> None:
        """Print info message."""
        self._colorized_print(text, "info")

    def dim(self, text: str) -> None:
        """Print dimmed text."""
        self._colorized_print(text, "dim")


console = ThemedConsole()
err_console = ThemedConsole(stderr=True)
