"""journali sort — show or change the saved list order."""

from __future__ import annotations

import click

from journali.journal.models import SortMode

from .common import AppContext

_DESCRIPTIONS = {
    SortMode.BY_BOOKMARK: "bookmarked entries first, oldest first",
    SortMode.BY_DATE: "newest entries first",
}


@click.command()
@click.argument("mode", required=False, type=click.Choice([m.value for m in SortMode]))
@click.pass_obj
def sort(app: AppContext, mode: str | None) -> None:
    """Show the list order, or set it to MODE."""
    prefs = app.preferences
    if mode is None:
        current = prefs.sort_mode
        click.echo(f"Sorting by {current.value}: {_DESCRIPTIONS[current]}.")
        return

    try:
        prefs.sort_mode = SortMode(mode)
    except OSError as e:
        raise click.ClickException(f"Could not save preference: {e}") from e
    click.echo(f"Now sorting by {mode}: {_DESCRIPTIONS[SortMode(mode)]}.")
