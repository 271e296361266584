"""Apply command."""
from typing import Optional, TextIO

import click

from ..core import ApplyContext, ApplyOptions, Reporter, load_actions_file, run_pipeline
from ..utils import build_consul, console, handle_errors
from .options import connection_options


@click.command("apply")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--dry", "--dry-run", "dry_run", is_flag=True, help="List the actions without applying them.")
@connection_options
@handle_errors
def apply_command(source: TextIO, dry_run: bool, server: Optional[str], token: Optional[str]):
    """\b
    Apply a list of actions to the Consul cluster.

    SOURCE is a JSON file ('-' for stdin) holding an ordered list of
    {"Action": ..., "Config": {...}} records. Actions run one by one, in
    file order, and the first failure stops the run.

    \b
    Examples:
      consul-register apply consul.json            # Apply all actions
      consul-register apply consul.json --dry      # Only list them
      consul-register export --kv | consul-register apply --server other:8500 -
    """
    opts = ApplyOptions(server=server, token=token, dry_run=dry_run)

    actions = load_actions_file(source)

    consul = None if opts.dry_run else build_consul(opts.server, opts.token)
    ctx = ApplyContext(consul, Reporter(console), dry_run=opts.dry_run)
    total = run_pipeline(ctx, actions)

    if opts.dry_run:
        console.warning(f"Dry run: {total} action{'s' if total != 1 else ''} listed, nothing applied")
    else:
        console.success(f"Applied {total} action{'s' if total != 1 else ''}")
