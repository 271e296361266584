"""Pipeline executing actions in sequence."""

from typing import List

from .actions import BaseAction
from .context import ApplyContext
from .exceptions import ActionApplyError, ActionValidationError


def validate_actions(actions: List[BaseAction]) -> None:
    """Validate every action before anything touches the cluster.

    Raises:
        ActionValidationError: annotated with the 1-based index of the
            first invalid action
    """
    for index, action in enumerate(actions, start=1):
        try:
            action.validate()
        except ActionValidationError as e:
            raise ActionValidationError(str(e), index=index, action=action) from e


def run_pipeline(ctx: ApplyContext, actions: List[BaseAction]) -> int:
    """Apply actions strictly in order.

    Args:
        ctx: The context holding the client, reporter and dry-run flag
        actions: Actions to apply, in apply order

    Returns:
        The number of actions walked

    The pipeline will:
    1. Validate all actions up front
    2. Report a progress line per action
    3. Apply it, unless in dry-run mode
    4. Stop at the first failure; earlier effects are kept
    """
    validate_actions(actions)

    total = len(actions)
    for index, action in enumerate(actions, start=1):
        ctx.reporter.progress(index, total, action.describe())
        if ctx.dry_run:
            continue

        try:
            action.apply(ctx)
        except Exception as e:
            raise ActionApplyError(index, total, action, e) from e

    return total
