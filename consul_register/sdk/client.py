"""Consul SDK - small synchronous client for the Consul HTTP API."""

import base64
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .config import Config
from .exceptions import (
    ConsulAuthError,
    ConsulConnectionError,
    ConsulError,
    ConsulNotFoundError,
    ConsulServerError,
)
from .models import (
    ACL_CLIENT_TYPE,
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


def _consistency_params(consistency: str) -> Dict[str, str]:
    if consistency == CONSISTENCY_CONSISTENT:
        return {"consistent": ""}
    if consistency == CONSISTENCY_STALE:
        return {"stale": ""}
    if consistency == CONSISTENCY_DEFAULT:
        return {}
    raise ValueError(f"Unknown consistency mode: {consistency!r}")


def _kv_path(key: str) -> str:
    return f"/kv/{quote(key.lstrip('/'), safe='/')}"


class Consul:
    """Access to the ACL, KV and catalog endpoints of one Consul agent."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config.load()
        self.headers = {}
        if self.config.token:
            self.headers["X-Consul-Token"] = self.config.token

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        consistency: str = CONSISTENCY_DEFAULT,
        **kwargs,
    ) -> requests.Response:
        """Make API request with error handling."""
        url = f"{self.config.address}/v1/{endpoint.lstrip('/')}"
        query = dict(params or {})
        query.update(_consistency_params(consistency))
        try:
            resp = requests.request(
                method,
                url,
                params=query or None,
                headers=self.headers,
                timeout=self.config.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise ConsulConnectionError(f"Unable to reach {self.config.address}: {e}") from e

        if resp.ok:
            return resp

        # Map errors
        if resp.status_code in (401, 403):
            raise ConsulAuthError(f"Permission denied: {resp.text.strip()}")
        if resp.status_code == 404:
            raise ConsulNotFoundError(f"Resource not found: {endpoint}")
        if 500 <= resp.status_code < 600:
            raise ConsulServerError(f"Server error {resp.status_code}: {resp.text.strip()}")
        raise ConsulError(f"API error {resp.status_code}: {resp.text.strip()}")

    # ACL

    def _dict_to_acl_entry(self, acl_dict: Dict) -> ACLEntry:
        return ACLEntry(
            id=acl_dict.get("ID", ""),
            name=acl_dict.get("Name", ""),
            type=acl_dict.get("Type", ACL_CLIENT_TYPE),
            rules=acl_dict.get("Rules", ""),
            create_index=acl_dict.get("CreateIndex", 0),
            modify_index=acl_dict.get("ModifyIndex", 0),
        )

    def acl_list(self, consistency: str = CONSISTENCY_CONSISTENT) -> List[ACLEntry]:
        """List all legacy ACL tokens."""
        data = self._request("GET", "/acl/list", consistency=consistency).json()
        return [self._dict_to_acl_entry(d) for d in data or []]

    def acl_create(self, entry: ACLEntry) -> str:
        """Create an ACL and return its generated ID."""
        payload = {"Name": entry.name, "Type": entry.type, "Rules": entry.rules}
        data = self._request("PUT", "/acl/create", json=payload).json()
        return (data or {}).get("ID", "")

    def acl_update(self, entry: ACLEntry) -> None:
        payload = {"ID": entry.id, "Name": entry.name, "Type": entry.type, "Rules": entry.rules}
        self._request("PUT", "/acl/update", json=payload)

    def acl_destroy(self, acl_id: str) -> None:
        self._request("PUT", f"/acl/destroy/{quote(acl_id, safe='')}")

    # KV

    def _dict_to_kv_pair(self, kv_dict: Dict) -> KVPair:
        raw = kv_dict.get("Value")
        return KVPair(
            key=kv_dict.get("Key", ""),
            flags=kv_dict.get("Flags", 0),
            value=base64.b64decode(raw) if raw else b"",
            create_index=kv_dict.get("CreateIndex", 0),
            modify_index=kv_dict.get("ModifyIndex", 0),
        )

    def kv_get(self, key: str, consistency: str = CONSISTENCY_DEFAULT) -> Optional[KVPair]:
        """Return the pair stored at ``key`` or None when it is absent."""
        try:
            data = self._request("GET", _kv_path(key), consistency=consistency).json()
        except ConsulNotFoundError:
            return None
        if not data:
            return None
        return self._dict_to_kv_pair(data[0])

    def kv_list(self, prefix: str = "", consistency: str = CONSISTENCY_DEFAULT) -> List[KVPair]:
        """Return every pair under ``prefix`` in key order."""
        try:
            data = self._request(
                "GET", _kv_path(prefix), params={"recurse": ""}, consistency=consistency
            ).json()
        except ConsulNotFoundError:
            return []
        return [self._dict_to_kv_pair(d) for d in data or []]

    def kv_put(self, pair: KVPair) -> bool:
        resp = self._request(
            "PUT", _kv_path(pair.key), params={"flags": pair.flags}, data=pair.value
        )
        return resp.json() is True

    def kv_cas(self, pair: KVPair) -> bool:
        """Check-and-set against ``pair.modify_index``.

        An index of 0 only writes when the key does not exist yet. Returns
        whether the write took place.
        """
        resp = self._request(
            "PUT",
            _kv_path(pair.key),
            params={"flags": pair.flags, "cas": pair.modify_index},
            data=pair.value,
        )
        return resp.json() is True

    def kv_delete(self, key: str) -> None:
        self._request("DELETE", _kv_path(key))

    def kv_delete_tree(self, prefix: str) -> None:
        self._request("DELETE", _kv_path(prefix), params={"recurse": ""})

    # Catalog

    def _dict_to_agent_service(self, service_dict: Dict) -> AgentService:
        return AgentService(
            id=service_dict.get("ID", ""),
            service=service_dict.get("Service", ""),
            tags=list(service_dict.get("Tags") or []),
            port=service_dict.get("Port", 0),
        )

    def catalog_register(self, registration: CatalogRegistration) -> None:
        payload: Dict[str, Any] = {
            "Node": registration.node,
            "Address": registration.address,
        }
        if registration.service is not None:
            service = registration.service
            payload["Service"] = {
                "ID": service.id,
                "Service": service.service,
                "Tags": list(service.tags),
                "Port": service.port,
            }
        self._request("PUT", "/catalog/register", json=payload)

    def catalog_deregister(self, node: str, service_id: Optional[str] = None) -> None:
        """Deregister a whole node, or only one of its services."""
        payload = {"Node": node}
        if service_id:
            payload["ServiceID"] = service_id
        self._request("PUT", "/catalog/deregister", json=payload)

    def catalog_nodes(self, consistency: str = CONSISTENCY_CONSISTENT) -> List[CatalogNode]:
        data = self._request("GET", "/catalog/nodes", consistency=consistency).json()
        return [CatalogNode(node=d.get("Node", ""), address=d.get("Address", "")) for d in data or []]

    def catalog_node(
        self, node: str, consistency: str = CONSISTENCY_CONSISTENT
    ) -> Optional[CatalogNodeDetail]:
        """Return the node and its services, or None for an unknown node."""
        data = self._request(
            "GET", f"/catalog/node/{quote(node, safe='')}", consistency=consistency
        ).json()
        if not data or not data.get("Node"):
            return None
        node_dict = data["Node"]
        services = data.get("Services") or {}
        return CatalogNodeDetail(
            node=CatalogNode(node=node_dict.get("Node", ""), address=node_dict.get("Address", "")),
            services=[self._dict_to_agent_service(s) for s in services.values()],
        )
