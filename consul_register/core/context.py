"""Context object handed to every action during apply."""

from typing import Optional, Union

from ..sdk import Consul
from .reporter import NullReporter, Reporter


class ApplyContext:
    """Shared context for the apply pipeline.

    Actions reach the cluster only through ``consul``. In dry-run mode the
    client may be None since no action is invoked.
    """

    def __init__(
        self,
        consul: Optional[Consul],
        reporter: Union[Reporter, NullReporter, None] = None,
        dry_run: bool = False,
    ):
        self.consul = consul
        self.reporter = reporter or NullReporter()
        self.dry_run = dry_run
