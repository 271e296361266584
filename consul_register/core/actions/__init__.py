"""Actions that can be applied to, and exported from, a Consul cluster."""

from .base import BaseAction, ConfigRecord
from .acl import ACLDelete, ACLSet
from .kv import KVDelete, KVDeleteTree, KVSet, KVSetIfNotExist
from .external_node import ExternalNodeDeregister, ExternalNodeRegister, ExternalNodeService
from .registry import (
    DEFAULT_FACTORIES,
    Factories,
    Factory,
    class_factory,
    default_factories,
    load_builtin_factories,
    new_action,
)

__all__ = [
    "BaseAction",
    "ConfigRecord",
    "ACLDelete",
    "ACLSet",
    "KVDelete",
    "KVDeleteTree",
    "KVSet",
    "KVSetIfNotExist",
    "ExternalNodeRegister",
    "ExternalNodeDeregister",
    "ExternalNodeService",
    "DEFAULT_FACTORIES",
    "Factories",
    "Factory",
    "class_factory",
    "default_factories",
    "load_builtin_factories",
    "new_action",
]
