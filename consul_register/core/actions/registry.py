"""Factory registry resolving type identifiers to empty actions."""

from typing import Callable, Dict, Type

from ..exceptions import UnknownFactoryID
from .base import BaseAction

Factory = Callable[[str], BaseAction]


class Factories(list):
    """Ordered list of action factories.

    A factory takes a type identifier and returns a new, empty action. It
    raises UnknownFactoryID for identifiers it does not handle.
    """

    def register(self, factory: Factory) -> None:
        self.append(factory)

    def new_action(self, type_id: str) -> BaseAction:
        """Return a new empty action from the first factory that claims ``type_id``.

        Any error other than UnknownFactoryID aborts the lookup.
        """
        for factory in self:
            try:
                return factory(type_id)
            except UnknownFactoryID:
                continue
        raise UnknownFactoryID(type_id)


def class_factory(*classes: Type[BaseAction]) -> Factory:
    """Build a factory instantiating ``classes`` keyed by their ``type_id``."""
    by_type: Dict[str, Type[BaseAction]] = {cls.type_id: cls for cls in classes}

    def factory(type_id: str) -> BaseAction:
        cls = by_type.get(type_id)
        if cls is None:
            raise UnknownFactoryID(type_id)
        return cls()

    return factory


DEFAULT_FACTORIES = Factories()
_BUILTINS_LOADED = False


def load_builtin_factories() -> None:
    """
    Register the built-in ACL, KV and external node actions.

    Called explicitly at start-up; safe to call more than once.
    """
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return

    from . import acl, external_node, kv

    acl.register(DEFAULT_FACTORIES)
    kv.register(DEFAULT_FACTORIES)
    external_node.register(DEFAULT_FACTORIES)

    _BUILTINS_LOADED = True


def default_factories() -> Factories:
    if not _BUILTINS_LOADED:
        load_builtin_factories()
    return DEFAULT_FACTORIES


def new_action(type_id: str) -> BaseAction:
    return default_factories().new_action(type_id)
