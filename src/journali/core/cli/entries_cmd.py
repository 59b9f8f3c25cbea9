"""journali list / show / add / edit / delete / bookmark."""

from __future__ import annotations

import click

from journali.journal.editor import EditorSession, EditorState
from journali.journal.models import SortMode
from journali.journal.projector import project
from journali.journal.store import EntryStore

from .common import AppContext, ensure_saved, format_entry_line, resolve_entry

SORT_CHOICES = click.Choice([m.value for m in SortMode])

_EDIT_TEMPLATE_HINT = "# First line is the title. Everything after the blank line is the entry."


def _split_edited_text(text: str) -> tuple[str, str]:
    """Turn text from $EDITOR into (title, content). The first line is the title.

    Only the hint line we put at the top is dropped; any other line starting
    with ``#`` belongs to the entry.
    """
    lines = text.splitlines()
    if lines and lines[0].rstrip() == _EDIT_TEMPLATE_HINT:
        lines = lines[1:]
    if not lines:
        return "", ""
    return lines[0], "\n".join(lines[1:]).strip("\n")


def _run_editor(session: EditorSession) -> None:
    """Edit the draft in $EDITOR until it can be saved or the user gives up."""
    text = f"{_EDIT_TEMPLATE_HINT}\n{session.title}\n\n{session.content}"
    while True:
        edited = click.edit(text)
        if edited is not None:
            session.title, session.content = _split_edited_text(edited)
            text = edited
        if session.can_save:
            return
        if session.request_cancel() == EditorState.CLOSED:
            return
        if click.confirm("The title is empty. Discard changes on this journal?", default=True):
            session.discard()
            return
        session.keep_editing()


def _finish(session: EditorSession, store: EntryStore) -> None:
    """Save the session or explain why not. Exits non-zero on rejection."""
    entry = session.save()
    if entry is None:
        session.discard()
        raise click.ClickException("Title cannot be empty; nothing was saved.")
    ensure_saved(store)
    verb = "Added" if session.is_new else "Updated"
    click.echo(f"{verb} {entry.id[:8]}: {entry.title}")


@click.command("list")
@click.option("--search", "-s", default="", help="Only show entries whose title or text contains this.")
@click.option("--sort", "sort_mode", type=SORT_CHOICES, default=None, help="Override the saved sort order.")
@click.pass_obj
def list_entries(app: AppContext, search: str, sort_mode: str | None) -> None:
    """List journal entries."""
    mode = SortMode(sort_mode) if sort_mode else app.preferences.sort_mode
    store = app.store

    if len(store) == 0 and not search:
        click.echo("Begin your journal: run 'journali add' to write the first entry.")
        return

    shown = project(store.snapshot(), search, mode)
    if not shown:
        click.echo(f"No entries match '{search}'.")
        return
    for entry in shown:
        click.echo(format_entry_line(entry))


@click.command()
@click.argument("entry_id")
@click.pass_obj
def show(app: AppContext, entry_id: str) -> None:
    """Show one entry in full."""
    try:
        from rich.console import Console
        from rich.panel import Panel
        from rich.text import Text
    except ImportError:
        raise click.ClickException("Install rich: pip install rich")

    entry = resolve_entry(app.store, entry_id)
    lines = [f"{entry.created_at:%A, %d %B %Y %H:%M}"]
    if entry.audio_ref:
        lines.append(f"Audio: {entry.audio_ref}")
    if entry.content:
        lines.extend(["", entry.content])

    title = f"{'* ' if entry.is_bookmarked else ''}{entry.title}"
    Console().print(Panel(Text("\n".join(lines)), title=Text(title), subtitle=Text(entry.id), expand=False))


@click.command()
@click.option("--title", "-t", default=None, help="Entry title. Opens $EDITOR when omitted.")
@click.option("--content", "-c", default="", help="Entry text.")
@click.pass_obj
def add(app: AppContext, title: str | None, content: str) -> None:
    """Write a new entry."""
    store = app.store
    session = EditorSession.create(
        store,
        content=content,
        always_confirm=app.config.always_confirm_discard,
    )

    if title is None:
        _run_editor(session)
        if session.is_closed:
            click.echo("Nothing saved.")
            return
    else:
        session.title = title

    _finish(session, store)


@click.command()
@click.argument("entry_id")
@click.option("--title", "-t", default=None, help="New title.")
@click.option("--content", "-c", default=None, help="New text.")
@click.pass_obj
def edit(app: AppContext, entry_id: str, title: str | None, content: str | None) -> None:
    """Edit an entry. Opens $EDITOR unless --title or --content is given."""
    store = app.store
    entry = resolve_entry(store, entry_id)
    session = EditorSession.edit(
        store,
        entry,
        always_confirm=app.config.always_confirm_discard,
    )

    if title is None and content is None:
        _run_editor(session)
        if session.is_closed:
            click.echo("Changes discarded.")
            return
    else:
        if title is not None:
            session.title = title
        if content is not None:
            session.content = content

    if not session.is_dirty:
        session.discard()
        click.echo("No changes.")
        return

    _finish(session, store)


@click.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation.")
@click.pass_obj
def delete(app: AppContext, entry_id: str, yes: bool) -> None:
    """Delete an entry."""
    store = app.store
    entry = resolve_entry(store, entry_id)
    if not yes:
        click.confirm(f"Delete '{entry.title}'? Are you sure you want to delete this journal?", abort=True)
    store.delete(entry.id)
    ensure_saved(store)
    click.echo(f"Deleted {entry.id[:8]}.")


@click.command()
@click.argument("entry_id")
@click.pass_obj
def bookmark(app: AppContext, entry_id: str) -> None:
    """Toggle the bookmark on an entry."""
    store = app.store
    entry = resolve_entry(store, entry_id)
    store.toggle_bookmark(entry.id)
    ensure_saved(store)
    state = "Bookmarked" if store.get(entry.id).is_bookmarked else "Removed bookmark from"
    click.echo(f"{state} {entry.id[:8]}: {entry.title}")
