"""Journali CLI — entry point for list, add, edit and friends."""

import click

from journali import __version__


@click.group()
@click.version_option(version=__version__, package_name="journali")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="Config file (YAML or JSON).")
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Where the journal is kept.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Overrides logging.level from the config file.",
)
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None, log_level: str | None) -> None:
    """Journali — your thoughts, your story."""
    from journali.core.exceptions import ConfigurationError
    from journali.core.utils.logging import setup_logging

    from .common import AppContext, load_config

    try:
        config = load_config(config_file, data_dir)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(level=log_level or config.log_level, log_file=config.log_path)
    ctx.obj = AppContext(config=config)


# Register subcommands
from .entries_cmd import add, bookmark, delete, edit, list_entries, show
from .sort_cmd import sort
from .voice_cmd import voice_note

main.add_command(list_entries)
main.add_command(show)
main.add_command(add)
main.add_command(edit)
main.add_command(delete)
main.add_command(bookmark)
main.add_command(voice_note)
main.add_command(sort)
