"""
Note Commands.

List, compose, edit, show and delete notes. Each command opens its own
NoteStore for the configured database and closes it before returning.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from notekeeper.core.exceptions import ApplicationError
from notekeeper.core.utils import to_single_line, truncate_text
from notekeeper.services.note import NoteStore, filter_notes
from notekeeper.services.session import EditSession, SaveOutcome, SaveStatus

console = Console()


@asynccontextmanager
async def _open_store() -> AsyncGenerator[NoteStore, None]:
    """Open the configured store, exiting with an error banner on store failures."""
    store = NoteStore.from_config()
    try:
        await store.open()
        yield store
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        await store.close()


def _report(outcome: SaveOutcome, saved_message: str, skipped_message: str) -> None:
    if outcome.status is SaveStatus.SAVED:
        console.print(f"[green]{saved_message.format(id=outcome.note_id)}[/green]")
    elif outcome.status is SaveStatus.SKIPPED:
        console.print(f"[dim]{skipped_message}[/dim]")
    else:
        message = outcome.error.message if outcome.error else "unknown error"
        console.print(f"[red]Error: {message}[/red]")
        raise typer.Exit(1)


def list_notes(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Only notes whose title contains this text"),
) -> None:
    """
    List notes, most recently updated first.

    Examples:
        notekeeper list
        notekeeper list --search groceries
    """
    asyncio.run(_list_notes(search))


async def _list_notes(search: str | None) -> None:
    async with _open_store() as store:
        snapshot = await store.list_all()

    notes = filter_notes(snapshot, search)
    if not notes:
        console.print("[dim]No notes found[/dim]")
        return

    table = Table(title="Notes", show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Preview")
    table.add_column("Updated", style="dim")

    for note in notes:
        table.add_row(
            str(note.id),
            escape(truncate_text(to_single_line(note.title))),
            escape(truncate_text(to_single_line(note.body))),
            note.updated_at.astimezone().strftime("%a %d %b %Y %H:%M"),
        )

    console.print(table)


def add(
    title: str = typer.Option("", "--title", "-t", help="Note title"),
    body: str = typer.Option("", "--body", "-b", help="Note body"),
) -> None:
    """
    Write a new note.

    Nothing is stored when both title and body are empty.

    Examples:
        notekeeper add --title "Groceries" --body "milk, eggs"
    """
    asyncio.run(_add(title, body))


async def _add(title: str, body: str) -> None:
    async with _open_store() as store:
        session = EditSession.compose(store)
        await session.start()
        session.title = title
        session.body = body
        outcome = await session.close()

    _report(outcome, "Saved note {id}", "Empty note, nothing saved")


def edit(
    note_id: int = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="New body"),
) -> None:
    """
    Change the title or body of a note.

    Options left out keep their current value.

    Examples:
        notekeeper edit 3 --title "Groceries (weekend)"
    """
    asyncio.run(_edit(note_id, title, body))


async def _edit(note_id: int, title: str | None, body: str | None) -> None:
    async with _open_store() as store:
        note = await store.get(note_id)
        if note is None:
            console.print(f"[red]Note {note_id} not found[/red]")
            raise typer.Exit(1)

        session = EditSession.edit(store, note)
        await session.start()
        if title is not None:
            session.title = title
        if body is not None:
            session.body = body
        outcome = await session.close()

    _report(outcome, "Updated note {id}", "No changes")


def show(
    note_id: int = typer.Argument(..., help="Note ID"),
) -> None:
    """Print a note as it would be shared or copied."""
    asyncio.run(_show(note_id))


async def _show(note_id: int) -> None:
    async with _open_store() as store:
        note = await store.get(note_id)

    if note is None:
        console.print(f"[red]Note {note_id} not found[/red]")
        raise typer.Exit(1)

    console.print(Panel(
        escape(note.share_text),
        title=f"Note {note.id}",
        subtitle=note.updated_at.astimezone().strftime("%a %d %b %Y %H:%M"),
    ))


def delete(
    note_id: int = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete a note. This cannot be undone.

    Examples:
        notekeeper delete 3
        notekeeper delete 3 --yes
    """
    asyncio.run(_delete(note_id, yes))


async def _delete(note_id: int, yes: bool) -> None:
    async with _open_store() as store:
        note = await store.get(note_id)
        if note is None:
            console.print(f"[red]Note {note_id} not found[/red]")
            raise typer.Exit(1)

        if not yes:
            label = truncate_text(to_single_line(note.title)) or f"note {note_id}"
            typer.confirm(f"Delete '{label}'?", abort=True)

        await store.delete(note_id)

    console.print(f"[green]Deleted note {note_id}[/green]")


def info() -> None:
    """Show the database location and how many notes it holds."""
    asyncio.run(_info())


async def _info() -> None:
    from notekeeper.core.config import get_app_config

    app_config = get_app_config()
    async with _open_store() as store:
        total = await store.count()
        location = store.location

    table = Table(title=app_config.application.name, show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Version", app_config.application.version)
    table.add_row("Database", location)
    table.add_row("Notes", str(total))
    console.print(table)
