"""CLI entry points for the Cerberus pipeline.

Provides command-line tools for:
- Building the dashboard datasets
- Reporting unresolved entity mentions
- Submitting and inspecting FocusPoints
"""

import click

from .. import __version__
from ..logging import setup_logging
from .build import cli as build_cli
from .focuspoint import cli as focuspoint_cli
from .resolve import cli as resolve_cli


@click.group()
@click.version_option(version=__version__, prog_name="cerberus-pipeline")
def main():
    """Cerberus pipeline - markdown dossiers to dashboard datasets.

    Command-line tools for building datasets from the content
    repository and managing FocusPoint leads.
    """
    setup_logging()


main.add_command(build_cli, name="build")
main.add_command(resolve_cli, name="resolve")
main.add_command(focuspoint_cli, name="focuspoint")


if __name__ == "__main__":
    main()
