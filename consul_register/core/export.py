"""Export of live cluster state as an ordered action list."""

from typing import List

from ..sdk import ACL_MANAGEMENT_TYPE, CONSISTENCY_CONSISTENT, Consul, ConsulError
from .actions import ACLSet, BaseAction, ExternalNodeRegister, ExternalNodeService, KVSet
from .exceptions import ExportError
from .options import ExportOptions

# Service ID carried by nodes that run a Consul agent themselves.
AGENT_SERVICE_ID = "consul"


def export_acl(consul: Consul) -> List[BaseAction]:
    """One ACLSet per ACL, management tokens excluded."""
    return [
        ACLSet(name=acl.name, rules=acl.rules)
        for acl in consul.acl_list(consistency=CONSISTENCY_CONSISTENT)
        if acl.type != ACL_MANAGEMENT_TYPE
    ]


def export_external_nodes(consul: Consul) -> List[BaseAction]:
    """One ExternalNodeRegister per catalog node that is not an agent."""
    actions: List[BaseAction] = []
    for listed in consul.catalog_nodes(consistency=CONSISTENCY_CONSISTENT):
        detail = consul.catalog_node(listed.node, consistency=CONSISTENCY_CONSISTENT)
        if detail is None:
            # Deregistered between the two calls.
            continue
        if any(s.id == AGENT_SERVICE_ID for s in detail.services):
            continue
        actions.append(
            ExternalNodeRegister(
                node=detail.node.node,
                address=detail.node.address,
                services=[
                    ExternalNodeService(id=s.id, service=s.service, tags=list(s.tags), port=s.port)
                    for s in detail.services
                ],
            )
        )
    return actions


def export_kv(consul: Consul) -> List[BaseAction]:
    """One KVSet per key in the store."""
    return [
        KVSet(key=pair.key, flags=pair.flags, value=pair.value.decode("utf-8", errors="replace"))
        for pair in consul.kv_list("")
    ]


def export_actions(consul: Consul, options: ExportOptions) -> List[BaseAction]:
    """Collect the selected categories, in the order ACL, external nodes, KV.

    Raises:
        ExportError: any query failed; nothing is returned in that case
    """
    categories = [
        ("ACL", options.acl, export_acl),
        ("external nodes", options.external_node, export_external_nodes),
        ("KV", options.kv, export_kv),
    ]
    actions: List[BaseAction] = []
    for name, selected, export in categories:
        if not selected:
            continue
        try:
            actions.extend(export(consul))
        except ConsulError as e:
            raise ExportError(name, e) from e
    return actions
