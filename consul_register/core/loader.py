"""Conversion between declarative records and ordered action lists.

A declarative source is a JSON array of records::

    [{"Action": "KVSet", "Config": {"Key": "app/flag", "Value": "on"}}]

Export writes the very same shape, so its output can be applied as is.
"""

import json
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, TextIO

from .actions import BaseAction, Factories, default_factories
from .exceptions import ActionError, ActionLoadError, DecodeError


def load_actions(records: Any, factories: Optional[Factories] = None) -> List[BaseAction]:
    """Turn records into actions, keeping their order.

    The "Action" and "Config" keys match regardless of case, like Config fields.

    Actions are not validated here; the apply pipeline does that.

    Raises:
        ActionLoadError: a record has an unknown type or a malformed Config.
            ``index`` is 1-based.
    """
    factories = default_factories() if factories is None else factories
    if not isinstance(records, list):
        raise DecodeError("Unable to load actions, expected a JSON array of records")

    actions = []
    for index, record in enumerate(records, start=1):
        if not isinstance(record, Mapping):
            raise ActionLoadError(index, "?", DecodeError("record must be an object"))
        by_name = {str(k).lower(): v for k, v in record.items()}
        type_id = by_name.get("action")
        if not isinstance(type_id, str):
            raise ActionLoadError(index, str(type_id), DecodeError("Action must be a string"))
        try:
            action = factories.new_action(type_id)
            action.decode(by_name.get("config"))
        except ActionError as e:
            raise ActionLoadError(index, type_id, e) from e
        actions.append(action)
    return actions


def load_actions_file(stream: TextIO, factories: Optional[Factories] = None) -> List[BaseAction]:
    """Parse a JSON document from ``stream`` and load its records."""
    try:
        records = json.load(stream)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Unable to load actions from JSON: {e}") from e
    return load_actions(records, factories)


def dump_actions(actions: Iterable[BaseAction]) -> List[Dict[str, Any]]:
    return [action.to_record() for action in actions]


def dumps_actions(actions: Iterable[BaseAction]) -> str:
    """Serialize actions as pretty printed JSON, newline terminated."""
    return json.dumps(dump_actions(actions), indent=2, ensure_ascii=False) + "\n"
