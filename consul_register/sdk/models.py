"""Data models for Consul API responses and requests."""

from dataclasses import dataclass, field
from typing import List, Optional

ACL_CLIENT_TYPE = "client"
ACL_MANAGEMENT_TYPE = "management"

CONSISTENCY_DEFAULT = "default"
CONSISTENCY_CONSISTENT = "consistent"
CONSISTENCY_STALE = "stale"


@dataclass
class ACLEntry:
    """Legacy ACL token entry."""
    id: str = ""
    name: str = ""
    type: str = ACL_CLIENT_TYPE
    rules: str = ""
    create_index: int = 0
    modify_index: int = 0


@dataclass
class KVPair:
    """A single key in the KV store. ``value`` is the raw payload."""
    key: str
    flags: int = 0
    value: bytes = b""
    create_index: int = 0
    modify_index: int = 0


@dataclass
class AgentService:
    id: str = ""
    service: str = ""
    tags: List[str] = field(default_factory=list)
    port: int = 0


@dataclass
class CatalogNode:
    node: str
    address: str = ""


@dataclass
class CatalogNodeDetail:
    """A catalog node together with the services attached to it."""
    node: CatalogNode
    services: List[AgentService] = field(default_factory=list)


@dataclass
class CatalogRegistration:
    node: str
    address: str
    service: Optional[AgentService] = None
