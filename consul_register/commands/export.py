"""Export command."""
from typing import Optional

import click

from ..core import ExportOptions, dumps_actions, export_actions
from ..utils import build_consul, err_console, handle_errors, loading_status
from .options import connection_options


@click.command("export")
@click.option("--acl", is_flag=True, help="Include ACL.")
@click.option("--external-node", "--externalNode", "external_node", is_flag=True, help="Include external nodes.")
@click.option("--kv", is_flag=True, help="Include KV.")
@connection_options
@handle_errors
def export_command(acl: bool, external_node: bool, kv: bool, server: Optional[str], token: Optional[str]):
    """\b
    Export Consul configuration as a list of actions.

    The JSON is written to stdout and can be fed back to 'apply'.
    Management ACLs and nodes running a Consul agent are never exported.

    \b
    Examples:
      consul-register export --acl --kv > consul.json
      consul-register export --external-node
    """
    opts = ExportOptions(server=server, token=token, acl=acl, external_node=external_node, kv=kv)
    if not opts.any_selected():
        err_console.warning("Nothing selected, use --acl, --external-node and/or --kv")

    consul = build_consul(opts.server, opts.token)
    with loading_status("Exporting", out=err_console):
        actions = export_actions(consul, opts)

    # stdout carries only the JSON document
    click.echo(dumps_actions(actions), nl=False)
    err_console.dim(f"Exported {len(actions)} action{'s' if len(actions) != 1 else ''}")
