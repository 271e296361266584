"""Config management commands."""
import click
from rich.markup import escape
from rich.table import Table

from ..config import ConfigManager
from ..utils import console, handle_errors

SECRET_KEYS = {"consul.token"}


def _display_value(key: str, value: str) -> str:
    if key in SECRET_KEYS and value:
        return value[:4] + "…" if len(value) > 4 else "…"
    return value


@click.command("get")
@click.argument("key")
@handle_errors
def config_get_command(key: str):
    """Print the value of KEY (e.g. consul.server)."""
    value = ConfigManager().get(key)
    if value is None:
        console.warning(f"{escape(key)} is not set")
        return
    click.echo(value)


@click.command("set")
@click.argument("key")
@click.argument("value")
@handle_errors
def config_set_command(key: str, value: str):
    """\b
    Set KEY to VALUE.

    \b
    Examples:
      consul-register config set consul.server http://10.0.0.5:8500
      consul-register config set consul.token 8f2c...
      consul-register config set ui.theme dark
    """
    ConfigManager().set(key, value)
    console.success(f"{escape(key)} = {escape(_display_value(key, value))}")


@click.command("unset")
@click.argument("key")
@handle_errors
def config_unset_command(key: str):
    """Remove KEY from the configuration."""
    if ConfigManager().unset(key):
        console.success(f"{escape(key)} removed")
    else:
        console.warning(f"{escape(key)} is not set")


@click.command("show")
@handle_errors
def config_show_command():
    """Show the entire configuration."""
    values = ConfigManager().all()
    if not values:
        console.warning("Configuration is empty")
        return

    table = Table(show_header=True, header_style="dim", box=None, pad_edge=False)
    table.add_column("Key", no_wrap=True)
    table.add_column("Value")
    for key, value in sorted(values.items()):
        table.add_row(escape(key), escape(_display_value(key, value)))
    console.print(table)


@click.command("path")
@handle_errors
def config_path_command():
    """Print the path of the configuration file."""
    click.echo(str(ConfigManager().get_config_path()))


@click.group(invoke_without_command=True)
@click.pass_context
def config_command(ctx):
    """Manage consul-register configuration.

    \b
    Commands:
      show  - Show all values (default)
      get   - Print one value
      set   - Set a value
      unset - Remove a value
      path  - Print the config file path
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(config_show_command)


config_command.add_command(config_get_command)
config_command.add_command(config_set_command)
config_command.add_command(config_unset_command)
config_command.add_command(config_show_command)
config_command.add_command(config_path_command)
