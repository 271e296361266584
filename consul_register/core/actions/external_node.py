"""External node catalog actions.

External nodes are catalog entries for machines that do not run a Consul
agent. They are registered directly against the catalog, service by
service.
"""

from dataclasses import dataclass
from typing import List

from ...sdk import AgentService, CatalogRegistration
from ..context import ApplyContext
from .base import (
    BaseAction,
    ConfigRecord,
    config_field,
    decode_int,
    decode_str,
    list_of,
    quote,
    record_of,
    require,
)
from .registry import Factories, class_factory


@dataclass
class ExternalNodeService(ConfigRecord):
    """A service provided by an external node."""

    id: str = config_field("ID", decode_str, default="")
    service: str = config_field("Service", decode_str, default="")
    tags: List[str] = config_field("Tags", list_of(decode_str, str), default_factory=list)
    port: int = config_field("Port", decode_int, default=0)

    def describe(self) -> str:
        return f"{quote(self.service)} {quote(self.id)} {quote(', '.join(self.tags))} {self.port}"


@dataclass
class ExternalNodeRegister(BaseAction):
    """Register a node, then each of its services, in order."""

    type_id = "ExternalNodeRegister"

    node: str = config_field("Node", decode_str, default="")
    address: str = config_field("Address", decode_str, default="")
    services: List[ExternalNodeService] = config_field(
        "Services",
        list_of(record_of(ExternalNodeService), ExternalNodeService),
        default_factory=list,
    )

    def apply(self, ctx: ApplyContext) -> None:
        ctx.consul.catalog_register(CatalogRegistration(node=self.node, address=self.address))
        for s in self.services:
            ctx.consul.catalog_register(
                CatalogRegistration(
                    node=self.node,
                    address=self.address,
                    service=AgentService(
                        id=s.id, service=s.service, tags=list(s.tags), port=s.port
                    ),
                )
            )

    def validate(self) -> None:
        require(self.node, "Node")
        require(self.address, "Address")
        for s in self.services:
            require(s.service, "Service")

    def describe(self) -> str:
        text = f"External Node Register {quote(self.node)} {quote(self.address)}"
        if not self.services:
            return text
        return f"{text} services, " + ", ".join(s.describe() for s in self.services)


@dataclass
class ExternalNodeDeregister(BaseAction):
    """Deregister a whole node, or only the listed service IDs."""

    type_id = "ExternalNodeDeregister"

    node: str = config_field("Node", decode_str, default="")
    services: List[str] = config_field("Services", list_of(decode_str, str), default_factory=list)

    def apply(self, ctx: ApplyContext) -> None:
        if not self.services:
            # Removing the node removes all of its services with it.
            ctx.consul.catalog_deregister(self.node)
            return
        for service_id in self.services:
            ctx.consul.catalog_deregister(self.node, service_id=service_id)

    def validate(self) -> None:
        require(self.node, "Node")
        for service_id in self.services:
            require(service_id, "Services")

    def describe(self) -> str:
        if not self.services:
            return f"External Node Deregister {quote(self.node)}"
        return f"External Node Deregister {quote(self.node)} services {quote(', '.join(self.services))}"


def register(factories: Factories) -> None:
    factories.register(class_factory(ExternalNodeRegister, ExternalNodeDeregister))
