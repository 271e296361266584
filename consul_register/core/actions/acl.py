"""ACL actions."""

from dataclasses import dataclass

from ...sdk import ACL_CLIENT_TYPE, ACLEntry
from ..context import ApplyContext
from .base import BaseAction, config_field, decode_str, quote, require
from .registry import Factories, class_factory


def _matching(ctx: ApplyContext, name: str):
    # Names are not unique in the ACL store, act on every match.
    return [acl for acl in ctx.consul.acl_list() if acl.name == name]


@dataclass
class ACLDelete(BaseAction):
    """Delete every ACL whose name matches."""

    type_id = "ACLDelete"

    name: str = config_field("Name", decode_str, default="")

    def apply(self, ctx: ApplyContext) -> None:
        for acl in _matching(ctx, self.name):
            ctx.consul.acl_destroy(acl.id)

    def validate(self) -> None:
        require(self.name, "Name")

    def describe(self) -> str:
        return f"ACL Delete {quote(self.name)}"


@dataclass
class ACLSet(BaseAction):
    """Update the rules of every ACL with this name, or create one."""

    type_id = "ACLSet"

    name: str = config_field("Name", decode_str, default="")
    rules: str = config_field("Rules", decode_str, default="")

    def apply(self, ctx: ApplyContext) -> None:
        existing = _matching(ctx, self.name)
        for acl in existing:
            ctx.consul.acl_update(
                ACLEntry(id=acl.id, name=acl.name, type=ACL_CLIENT_TYPE, rules=self.rules)
            )
        if not existing:
            ctx.consul.acl_create(
                ACLEntry(name=self.name, type=ACL_CLIENT_TYPE, rules=self.rules)
            )

    def validate(self) -> None:
        require(self.name, "Name")

    def describe(self) -> str:
        return f"ACL Set {quote(self.name)} {quote(self.rules)}"


def register(factories: Factories) -> None:
    factories.register(class_factory(ACLDelete, ACLSet))
