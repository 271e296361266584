"""Reporter classes for controlling command output."""

from typing import Optional

from rich.markup import escape

from ..themed_console import ThemedConsole, console as default_console


class Reporter:
    """Default reporter that prints progress lines and status messages."""

    def __init__(self, console: Optional[ThemedConsole] = None):
        self.console = console or default_console

    def progress(self, index: int, total: int, description: str) -> None:
        """Print one progress line, e.g. ``" 3 of 12 - KV Delete "a""``.

        Index and total are padded to the width of ``total`` so lines align.
        """
        width = len(str(total))
        self.console.print(
            f"{index:>{width}d} of {total:<{width}d} - {escape(description)}",
            highlight=False,
            soft_wrap=True,
        )

    def info(self, message: str) -> None:
        """Display an info message."""
        self.console.info(escape(message))

    def success(self, message: str) -> None:
        """Display a success message."""
        self.console.success(escape(message))

    def error(self, message: str) -> None:
        """Display an error message."""
        self.console.error(escape(message))

    def warning(self, message: str) -> None:
        """Display a warning message."""
        self.console.warning(escape(message))

    def dim(self, message: str) -> None:
        """Display a dimmed/secondary message."""
        self.console.dim(escape(message))


class NullReporter:
    """No-op reporter for testing or embedding."""

    def progress(self, index: int, total: int, description: str) -> None:
        """No-op."""
        pass

    def info(self, message: str) -> None:
        """No-op."""
        pass

    def success(self, message: str) -> None:
        """No-op."""
        pass

    def error(self, message: str) -> None:
        """No-op."""
        pass

    def warning(self, message: str) -> None:
        """No-op."""
        pass

    def dim(self, message: str) -> None:
        """No-op."""
        pass
