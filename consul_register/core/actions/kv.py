"""KV store actions."""

from dataclasses import dataclass
from typing import Optional

from ...sdk import KVPair
from ..context import ApplyContext
from .base import BaseAction, config_field, decode_str, decode_uint64, quote, require
from .registry import Factories, class_factory


@dataclass
class KVDelete(BaseAction):
    type_id = "KVDelete"

    key: str = config_field("Key", decode_str, default="")

    def apply(self, ctx: ApplyContext) -> None:
        ctx.consul.kv_delete(self.key)

    def validate(self) -> None:
        require(self.key, "Key")

    def describe(self) -> str:
        return f"KV Delete {quote(self.key)}"


@dataclass
class KVDeleteTree(BaseAction):
    """Delete every key under a prefix."""

    type_id = "KVDeleteTree"

    prefix: str = config_field("Prefix", decode_str, default="")

    def apply(self, ctx: ApplyContext) -> None:
        ctx.consul.kv_delete_tree(self.prefix)

    def validate(self) -> None:
        require(self.prefix, "Prefix")

    def describe(self) -> str:
        return f"KV Delete Tree {quote(self.prefix)}"


@dataclass
class KVSet(BaseAction):
    """Create or overwrite a key."""

    type_id = "KVSet"

    key: str = config_field("Key", decode_str, default="")
    flags: int = config_field("Flags", decode_uint64, default=0)
    value: str = config_field("Value", decode_str, default="")

    def pair(self, modify_index: int = 0) -> KVPair:
        return KVPair(
            key=self.key,
            flags=self.flags,
            value=self.value.encode("utf-8"),
            modify_index=modify_index,
        )

    def apply(self, ctx: ApplyContext) -> None:
        ctx.consul.kv_put(self.pair())

    def validate(self) -> None:
        require(self.key, "Key")

    def describe(self) -> str:
        return f"KV Set {quote(self.key)} {self.flags} {quote(self.value)}"


@dataclass
class KVSetIfNotExist(KVSet):
    """Create a key only when it does not exist yet.

    An existing key is left untouched; this is reported as a warning and
    ``apply`` returns False rather than failing the sequence.
    """

    type_id = "KVSetIfNotExist"

    def apply(self, ctx: ApplyContext) -> Optional[bool]:
        # A check-and-set index of 0 only writes when the key is absent.
        written = ctx.consul.kv_cas(self.pair(modify_index=0))
        if not written:
            ctx.reporter.warning(f"Key {quote(self.key)} already exists, not set")
            return False
        return None

    def describe(self) -> str:
        return f"KV Set If Not Exist {quote(self.key)} {self.flags} {quote(self.value)}"


def register(factories: Factories) -> None:
    factories.register(class_factory(KVDelete, KVDeleteTree, KVSet, KVSetIfNotExist))
