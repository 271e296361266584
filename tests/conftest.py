"""Pytest configuration and shared fixtures."""
import os
import tempfile
from copy import deepcopy
from dataclasses import replace
from typing import Dict, List, Optional

import pytest
from click.testing import CliRunner

from consul_register.core import ApplyContext, NullReporter
from consul_register.sdk import (
    ACLEntry,
    AgentService,
    CatalogNode,
    CatalogNodeDetail,
    CatalogRegistration,
    KVPair,
)


class FakeConsul:
    """In-memory stand-in for the Consul client.

    Every call is recorded in ``calls``. Put an exception in ``failures``
    under a method name to make that method raise it.
    """

    def __init__(self):
        self.acls: Dict[str, ACLEntry] = {}
        self.kv: Dict[str, KVPair] = {}
        self.nodes: Dict[str, CatalogNodeDetail] = {}
        self.calls: List[str] = []
        self.failures: Dict[str, Exception] = {}
        self._index = 0

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failures:
            raise self.failures[name]

    def _next_index(self) -> int:
        self._index += 1
        return self._index

    # ACL

    def add_acl(self, name: str, rules: str = "", type: str = "client") -> str:
        acl_id = f"acl-{self._next_index()}"
        self.acls[acl_id] = ACLEntry(id=acl_id, name=name, type=type, rules=rules)
        return acl_id

    def acl_list(self, consistency: str = "consistent") -> List[ACLEntry]:
        self._call("acl_list")
        return [replace(a) for a in self.acls.values()]

    def acl_create(self, entry: ACLEntry) -> str:
        self._call("acl_create")
        acl_id = f"acl-{self._next_index()}"
        self.acls[acl_id] = replace(entry, id=acl_id)
        return acl_id

    def acl_update(self, entry: ACLEntry) -> None:
        self._call("acl_update")
        self.acls[entry.id] = replace(entry)

    def acl_destroy(self, acl_id: str) -> None:
        self._call("acl_destroy")
        self.acls.pop(acl_id, None)

    # KV

    def kv_get(self, key: str, consistency: str = "default") -> Optional[KVPair]:
        self._call("kv_get")
        pair = self.kv.get(key)
        return replace(pair) if pair else None

    def kv_list(self, prefix: str = "", consistency: str = "default") -> List[KVPair]:
        self._call("kv_list")
        return [replace(self.kv[k]) for k in sorted(self.kv) if k.startswith(prefix)]

    def kv_put(self, pair: KVPair) -> bool:
        self._call("kv_put")
        self.kv[pair.key] = replace(pair, modify_index=self._next_index())
        return True

    def kv_cas(self, pair: KVPair) -> bool:
        self._call("kv_cas")
        current = self.kv.get(pair.key)
        current_index = current.modify_index if current else 0
        if pair.modify_index != current_index:
            return False
        self.kv[pair.key] = replace(pair, modify_index=self._next_index())
        return True

    def kv_delete(self, key: str) -> None:
        self._call("kv_delete")
        self.kv.pop(key, None)

    def kv_delete_tree(self, prefix: str) -> None:
        self._call("kv_delete_tree")
        for key in [k for k in self.kv if k.startswith(prefix)]:
            del self.kv[key]

    # Catalog

    def catalog_register(self, registration: CatalogRegistration) -> None:
        self._call("catalog_register")
        detail = self.nodes.setdefault(
            registration.node, CatalogNodeDetail(node=CatalogNode(node=registration.node))
        )
        detail.node.address = registration.address
        if registration.service is not None:
            detail.services = [s for s in detail.services if s.id != registration.service.id]
            detail.services.append(replace(registration.service))

    def catalog_deregister(self, node: str, service_id: Optional[str] = None) -> None:
        self._call("catalog_deregister")
        if not service_id:
            self.nodes.pop(node, None)
            return
        detail = self.nodes.get(node)
        if detail is not None:
            detail.services = [s for s in detail.services if s.id != service_id]

    def catalog_nodes(self, consistency: str = "consistent") -> List[CatalogNode]:
        self._call("catalog_nodes")
        return [replace(d.node) for d in self.nodes.values()]

    def catalog_node(self, node: str, consistency: str = "consistent") -> Optional[CatalogNodeDetail]:
        self._call("catalog_node")
        return deepcopy(self.nodes.get(node))

    def add_node(self, node: str, address: str, *services: AgentService) -> None:
        self.nodes[node] = CatalogNodeDetail(
            node=CatalogNode(node=node, address=address), services=list(services)
        )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_config(monkeypatch):
    """Create temporary config directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        config_dir = os.path.join(temp_dir, ".consul-register")
        os.makedirs(config_dir, exist_ok=True)
        monkeypatch.setenv("HOME", temp_dir)
        monkeypatch.delenv("CONSUL_HTTP_ADDR", raising=False)
        monkeypatch.delenv("CONSUL_HTTP_TOKEN", raising=False)
        yield config_dir


@pytest.fixture
def fake_consul() -> FakeConsul:
    return FakeConsul()


@pytest.fixture
def ctx(fake_consul) -> ApplyContext:
    """Live apply context backed by the fake cluster."""
    return ApplyContext(fake_consul, NullReporter())


@pytest.fixture
def sample_source() -> list:
    """Declarative records touching every action kind."""
    return [
        {"Action": "ACLSet", "Config": {"Name": "svc-a", "Rules": 'key "svc-a/" { policy = "write" }'}},
        {"Action": "ACLDelete", "Config": {"Name": "old"}},
        {"Action": "KVSet", "Config": {"Key": "app/flag", "Flags": 3, "Value": "on"}},
        {"Action": "KVSetIfNotExist", "Config": {"Key": "app/seed", "Flags": 0, "Value": "42"}},
        {"Action": "KVDelete", "Config": {"Key": "app/legacy"}},
        {"Action": "KVDeleteTree", "Config": {"Prefix": "tmp/"}},
        {
            "Action": "ExternalNodeRegister",
            "Config": {
                "Node": "db1",
                "Address": "10.0.0.10",
                "Services": [
                    {"ID": "pg-1", "Service": "postgres", "Tags": ["primary", "v14"], "Port": 5432},
                ],
            },
        },
        {"Action": "ExternalNodeDeregister", "Config": {"Node": "db0", "Services": ["pg-0"]}},
    ]
