"""Daybook CLI - offline journal."""

import json
import logging
import sys

import click

from .config import load_config
from .core.editor import clean_text, format_editor_date, format_list_date, is_valid_title
from .core.entry import Entry
from .errors import PersistenceWriteError
from .store import EntryStore
from .workflows import open_store

SHORT_ID_LENGTH = 8


@click.group()
@click.version_option(package_name="daybook")
@click.option("--home", type=click.Path(file_okay=False), default=None,
              help="Daybook home directory (default: ~/.daybook)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, home: str | None, debug: bool):
    """Daybook - offline journal."""
    config = load_config(home)
    if debug or config.log_level != "WARNING":
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG if debug else config.log_level,
        )
    ctx.obj = config


def _store(ctx) -> EntryStore:
    return open_store(ctx.obj)


def _find_entry(store: EntryStore, ref: str) -> Entry:
    """Resolve a full id or unique id prefix, exiting on failure."""
    entry = store.get(ref)
    if entry:
        return entry

    matches = [e for e in store.entries if e.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]

    if matches:
        click.echo(f"Error: '{ref}' matches {len(matches)} entries, use a longer id", err=True)
    else:
        click.echo(f"Error: no entry with id '{ref}'", err=True)
    sys.exit(1)


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_entries(ctx, as_json: bool):
    """List entries, newest first."""
    store = _store(ctx)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": e.id,
                        "title": e.title,
                        "preview": e.preview,
                        "created_at": e.created_at.isoformat(),
                        "updated_at": e.updated_at.isoformat(),
                    }
                    for e in store.entries
                ],
                indent=2,
            )
        )
        return

    if not store.entries:
        click.echo("Start your journey")
        click.echo("Run 'daybook new' to create your first journal entry")
        return

    for entry in store.entries:
        click.echo(f"{entry.id[:SHORT_ID_LENGTH]}  {entry.title}")
        if entry.preview:
            click.echo(f"          {entry.preview}")
        click.echo(f"          {format_list_date(entry.created_at)}")


@main.command()
@click.argument("entry_id")
@click.pass_context
def show(ctx, entry_id: str):
    """Show a single entry."""
    store = _store(ctx)
    entry = _find_entry(store, entry_id)

    click.echo(entry.title)
    click.echo(format_editor_date(entry.created_at))
    if entry.content:
        click.echo()
        click.echo(entry.content)


@main.command()
@click.option("--title", "-t", default=None, help="Entry title")
@click.option("--content", "-c", default=None, help="Entry text (opens $EDITOR when omitted)")
@click.pass_context
def new(ctx, title: str | None, content: str | None):
    """Create a new entry."""
    if title is None:
        title = click.prompt("Title your entry", default="", show_default=False)
    if content is None:
        content = click.edit("") or ""

    title = clean_text(title)
    content = clean_text(content)
    if not is_valid_title(title):
        click.echo("Error: title must not be empty", err=True)
        sys.exit(1)

    store = _store(ctx)
    try:
        entry = store.create(title, content)
    except PersistenceWriteError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Created {entry.id[:SHORT_ID_LENGTH]}")


@main.command()
@click.argument("entry_id")
@click.option("--title", "-t", default=None, help="New title")
@click.option("--content", "-c", default=None, help="New text (opens $EDITOR when omitted)")
@click.pass_context
def edit(ctx, entry_id: str, title: str | None, content: str | None):
    """Edit an existing entry."""
    store = _store(ctx)
    entry = _find_entry(store, entry_id)

    if title is None:
        title = entry.title
    if content is None:
        edited = click.edit(entry.content)
        content = entry.content if edited is None else edited

    title = clean_text(title)
    content = clean_text(content)
    if not is_valid_title(title):
        click.echo("Error: title must not be empty", err=True)
        sys.exit(1)

    try:
        store.update(entry.id, title, content)
    except PersistenceWriteError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Updated {entry.id[:SHORT_ID_LENGTH]}")


@main.command()
@click.argument("entry_ids", nargs=-1, required=True)
@click.pass_context
def rm(ctx, entry_ids: tuple[str, ...]):
    """Delete one or more entries."""
    store = _store(ctx)
    ids = {_find_entry(store, ref).id for ref in entry_ids}

    try:
        store.delete_many(ids)
    except PersistenceWriteError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    noun = "entry" if len(ids) == 1 else "entries"
    click.echo(f"✓ Deleted {len(ids)} {noun}")


if __name__ == "__main__":
    main()
