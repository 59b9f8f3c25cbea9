"""journali voice-note — attach an audio recording as a new entry."""

from __future__ import annotations

import click

from .common import AppContext, ensure_saved


@click.command("voice-note")
@click.argument("audio_path", type=click.Path(dir_okay=False))
@click.pass_obj
def voice_note(app: AppContext, audio_path: str) -> None:
    """Add a "Voice Note" entry pointing at AUDIO_PATH.

    The file is only referenced, never copied, moved or deleted.
    """
    from journali.journal.audio import ExistingFileCapture, VoiceNoteRecorder

    store = app.store
    recorder = VoiceNoteRecorder(store, ExistingFileCapture(audio_path))
    if not recorder.start():
        # Not fatal: report and leave the journal as it was
        click.echo(recorder.notice, err=True)
        return

    entry = recorder.stop()
    if entry is None:
        click.echo("No recording was captured.", err=True)
        return
    ensure_saved(store)
    click.echo(f"Added {entry.id[:8]}: {entry.title} ({entry.audio_ref})")
