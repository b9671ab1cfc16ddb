"""
entigraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import explore, init, show
from .utils import configure_logging


@click.group()
@click.version_option(package_name="entigraph")
@click.option("-v", "--verbose", is_flag=True, help="Log loader queries and graph merges")
def main(verbose: bool):
    """entigraph: Incremental Entity-Relationship Explorer.

    Start from one entity, then open attributes and related entities
    one click at a time. Data is read only as the graph grows.

    \b
    Quick Start:
      entigraph init --datasource csv
      entigraph explore
      entigraph show --click Boston -o graph.html
    """
    configure_logging(verbose)


main.add_command(init.init)
main.add_command(explore.explore)
main.add_command(show.show)

if __name__ == "__main__":
    main()
