"""Public SDK exports."""

from .client import Consul
from .config import Config, normalize_address
from .exceptions import (
    ConsulAuthError,
    ConsulConnectionError,
    ConsulError,
    ConsulNotFoundError,
    ConsulServerError,
)
from .models import (
    ACL_CLIENT_TYPE,
    ACL_MANAGEMENT_TYPE,
    CONSISTENCY_CONSISTENT,
    CONSISTENCY_DEFAULT,
    CONSISTENCY_STALE,
    ACLEntry,
    AgentService,
    CatalogNode,
    CatalogNodeDetail,
    CatalogRegistration,
    KVPair,
)

__all__ = [
    "Consul",
    "Config",
    "normalize_address",
    "ACLEntry",
    "AgentService",
    "CatalogNode",
    "CatalogNodeDetail",
    "CatalogRegistration",
    "KVPair",
    "ACL_CLIENT_TYPE",
    "ACL_MANAGEMENT_TYPE",
    "CONSISTENCY_CONSISTENT",
    "CONSISTENCY_DEFAULT",
    "CONSISTENCY_STALE",
    "ConsulError",
    "ConsulAuthError",
    "ConsulConnectionError",
    "ConsulNotFoundError",
    "ConsulServerError",
]
