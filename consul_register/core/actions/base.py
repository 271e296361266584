"""Base action class and the structural codec for action Config payloads."""

import json
from abc import ABC, abstractmethod
from dataclasses import field, fields
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional

from ..context import ApplyContext
from ..exceptions import ActionValidationError, DecodeError

UINT64_MAX = 2 ** 64 - 1

Decoder = Callable[[Any], Any]


def _type_name(value: Any) -> str:
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def decode_str(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {_type_name(value)}")
    return value


def decode_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"expected an integer, got {_type_name(value)}")
    return value


def decode_uint64(value: Any) -> int:
    value = decode_int(value)
    if not 0 <= value <= UINT64_MAX:
        raise DecodeError(f"{value} is out of range for an unsigned 64-bit integer")
    return value


def list_of(item: Decoder, empty: Callable[[], Any]) -> Decoder:
    """Build a decoder for a JSON array whose items use ``item``.

    A null item becomes ``empty()``, the same way a null field keeps its default.
    """

    def decode(value: Any) -> list:
        if not isinstance(value, list):
            raise DecodeError(f"expected an array, got {_type_name(value)}")
        items = []
        for i, v in enumerate(value):
            if v is None:
                items.append(empty())
                continue
            try:
                items.append(item(v))
            except DecodeError as e:
                raise DecodeError(f"[{i}] {e}") from None
        return items

    return decode


def record_of(cls) -> Decoder:
    """Build a decoder producing a populated ``cls`` instance."""
    return lambda value: cls().decode(value)


def config_field(name: str, decoder: Decoder, **kwargs):
    """Declare a dataclass field that maps to the Config key ``name``."""
    return field(metadata={"config": name, "decode": decoder}, **kwargs)


def quote(value: Any) -> str:
    """Double-quote a value for action descriptions."""
    return json.dumps(value, ensure_ascii=False)


def require(value: str, name: str) -> None:
    if not value:
        raise ActionValidationError(f"{name} must not be empty.")


def _encode(value: Any) -> Any:
    if isinstance(value, ConfigRecord):
        return value.to_config()
    if isinstance(value, list):
        return [_encode(v) for v in value]
    return value


class ConfigRecord:
    """Mixin for dataclasses populated from, and written back to, Config objects.

    Keys are matched case-insensitively, unknown keys are ignored and missing
    or null keys leave the field at its default.
    """

    def decode(self, config: Any):
        if config is None:
            return self
        if not isinstance(config, Mapping):
            raise DecodeError(f"expected an object, got {_type_name(config)}")
        by_name = {str(k).lower(): v for k, v in config.items()}
        for f in fields(self):
            name = f.metadata.get("config")
            if name is None:
                continue
            value = by_name.get(name.lower())
            if value is None:
                continue
            try:
                setattr(self, f.name, f.metadata["decode"](value))
            except DecodeError as e:
                raise DecodeError(f"{name}: {e}") from None
        return self

    def to_config(self) -> Dict[str, Any]:
        return {
            f.metadata["config"]: _encode(getattr(self, f.name))
            for f in fields(self)
            if "config" in f.metadata
        }


class BaseAction(ConfigRecord, ABC):
    """Base class for all actions.

    An action is one idempotent-intentioned change against the cluster.
    Each action:
    1. Checks locally that it carries the data it needs (validate)
    2. Describes itself for progress output (describe)
    3. Performs its change through the client held by the context (apply)
    """

    type_id: ClassVar[str] = ""

    @abstractmethod
    def apply(self, ctx: ApplyContext) -> Optional[bool]:
        """Perform the action against the cluster.

        Args:
            ctx: The apply context holding the Consul client

        Returns:
            None, or False when a conditional action decided not to write
        """

    @abstractmethod
    def validate(self) -> None:
        """Raise ActionValidationError when required data is missing."""

    @abstractmethod
    def describe(self) -> str:
        """Human readable, single line description."""

    def to_record(self) -> Dict[str, Any]:
        return {"Action": self.type_id, "Config": self.to_config()}

    def __str__(self) -> str:
        return self.describe()
