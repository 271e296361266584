"""Options dataclasses for command configuration."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ConnectionOptions:
    """Where and how to reach the Consul agent."""

    server: Optional[str] = None
    token: Optional[str] = None


@dataclass
class ApplyOptions(ConnectionOptions):
    """Configuration options for the 'apply' command."""

    dry_run: bool = False


@dataclass
class ExportOptions(ConnectionOptions):
    """Configuration options for the 'export' command.

    Each flag selects one independent category of live state.
    """

    acl: bool = False
    external_node: bool = False
    kv: bool = False

    def any_selected(self) -> bool:
        return self.acl or self.external_node or self.kv
