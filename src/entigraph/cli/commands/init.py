"""
Init Command - Write a starter configuration.

Creates entigraph.yaml for the chosen data source type with every option the
loader needs, ready to be edited.
"""

from pathlib import Path

import click
import yaml
from rich.console import Console

from ...config import DEFAULT_CONFIG, DEFAULT_CONFIG_FILE
from ..utils import echo_error

console = Console()

HEADER = """\
# entigraph configuration
#
# default_max_nodes   entities shown when an attribute is expanded
# use_tool_tip        show the column a value came from on hover
# datasource_type     database | csv
"""


@click.command()
@click.argument("directory", default=".", type=click.Path(file_okay=False))
@click.option("--datasource", type=click.Choice(sorted(DEFAULT_CONFIG), case_sensitive=False),
              default="database", show_default=True, help="Data source type to configure")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration")
def init(directory: str, datasource: str, force: bool):
    """
    Write a starter entigraph.yaml.
    """
    root_dir = Path(directory)
    root_dir.mkdir(parents=True, exist_ok=True)
    config_file = root_dir / DEFAULT_CONFIG_FILE

    if config_file.exists() and not force:
        echo_error(f"{config_file} already exists. Use --force to overwrite.")
        raise SystemExit(1)

    config = dict(DEFAULT_CONFIG[datasource.lower()])
    with open(config_file, "w") as f:
        f.write(HEADER)
        yaml.safe_dump(config, f, sort_keys=False)

    console.print(f"✅ Wrote [cyan]{config_file}[/cyan] for a {datasource.lower()} data source")
    console.print("   Next: edit the file, then run [bold]entigraph explore[/bold]")
