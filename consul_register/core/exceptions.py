"""Errors raised while loading, validating, applying and exporting actions."""

from typing import Optional


class ActionError(Exception):
    """Base class for action handling errors."""


class UnknownFactoryID(ActionError):
    """No registered factory recognises a type identifier.

    Factories raise this to say "not mine"; the registry moves on to the next
    factory and raises it itself once every factory declined.
    """

    def __init__(self, type_id: str):
        super().__init__(f'Unknown action "{type_id}"')
        self.type_id = type_id


class DecodeError(ActionError):
    """A Config payload does not fit the shape of its action."""


class ActionLoadError(ActionError):
    """A record of a declarative source could not be turned into an action."""

    def __init__(self, index: int, type_id: str, cause: Exception):
        super().__init__(f"Unable to load action #{index}, {type_id}: {cause}")
        self.index = index
        self.type_id = type_id
        self.cause = cause


class ActionValidationError(ActionError):
    """An action is missing required data."""

    def __init__(self, message: str, index: Optional[int] = None, action=None):
        if index is not None:
            message = f"Invalid action #{index}, {action}: {message}"
        super().__init__(message)
        self.index = index
        self.action = action


class ActionApplyError(ActionError):
    """Applying one action of a sequence against the cluster failed."""

    def __init__(self, index: int, total: int, action, cause: Exception):
        super().__init__(f"Action {index} of {total} failed ({action}): {cause}")
        self.index = index
        self.total = total
        self.action = action
        self.cause = cause


class ExportError(ActionError):
    """Querying live state for an export category failed."""

    def __init__(self, category: str, cause: Exception):
        super().__init__(f"Unable to export {category}: {cause}")
        self.category = category
        self.cause = cause
