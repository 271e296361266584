"""consul-register command line entry point."""
import click

from . import __version__
from .commands import apply_command, config_command, export_command
from .core.actions import load_builtin_factories


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="consul-register")
def cli():
    """Manage Consul ACLs, KV and external nodes from declarative JSON.

    \b
    Commands:
      apply   - Apply a list of actions to the cluster
      export  - Export live cluster state as actions
      config  - Manage local settings
    """
    load_builtin_factories()


cli.add_command(apply_command)
cli.add_command(export_command)
cli.add_command(config_command)


def main():
    cli()


if __name__ == "__main__":
    main()
