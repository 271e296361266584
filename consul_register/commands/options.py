"""Shared click options."""

import click


def connection_options(func):
    """Add --server and --token to a command."""
    func = click.option(
        "--token",
        default=None,
        help="Consul ACL token. Defaults to $CONSUL_HTTP_TOKEN or consul.token from config.",
    )(func)
    func = click.option(
        "--server",
        default=None,
        help="Consul server address, e.g. http://127.0.0.1:8500. "
        "Defaults to $CONSUL_HTTP_ADDR or consul.server from config.",
    )(func)
    return func
