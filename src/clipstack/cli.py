# region Docstring
"""
clipstack.cli
Command line front end for the clipboard history engine.
Contents:
- watch:     Capture the system clipboard until interrupted.
- list:      Show the history, newest first.
- show:      Show one entry, optionally writing its thumbnail.
- delete:    Delete an entry.
- favorite:  Toggle an entry's favorite flag.
- clear:     Delete every entry.
- check:     Verify that the stored history record decodes.
- restore:   Restore the newest readable backup of the history record.
Design notes:
- Entry ids may be abbreviated to any unique prefix.
- Only `watch` touches the OS clipboard. The editing commands open the engine over an
    in-memory clipboard.
"""
# endregion
# region Imports
import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from clipstack import __version__
from clipstack.clipboard import ClipboardAccessor, MemoryClipboard, SystemClipboard
from clipstack.config import (
    ClipboardSettings,
    LoggingSettings,
    config_files,
    get_settings,
)
from clipstack.engine import ClipboardEngine
from clipstack.logger import configure_logging
from clipstack.models import HistoryEntry
from clipstack.persistence import HistoryRepository

# endregion

console = Console(
    record=True,
    width=120,
    color_system="auto",
)

app = typer.Typer(name="clipstack", help="Clipboard history capture engine.")


# region Helpers
def _open_engine(accessor: Optional[ClipboardAccessor] = None) -> ClipboardEngine:
    settings = get_settings(ClipboardSettings)
    engine = ClipboardEngine(settings, accessor or MemoryClipboard())
    engine.load()
    return engine


def _resolve(engine: ClipboardEngine, entry_id: str) -> HistoryEntry:
    matches = [e for e in engine.history() if e.id.startswith(entry_id)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        console.print(f"[bold red]No entry matches '{entry_id}'.[/bold red]")
    else:
        console.print(
            f"[bold red]'{entry_id}' is ambiguous ({len(matches)} entries).[/bold red]"
        )
    raise typer.Exit(code=1)


def _entry_row(entry: HistoryEntry) -> tuple[str, ...]:
    return (
        entry.id[:8],
        entry.tag,
        escape(entry.preview),
        entry.captured_at.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
        str(entry.provenance),
        "*" if entry.is_favorite else "",
    )


# endregion
# region Commands
@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override CLIPSTACK_LOG_LEVEL."
    ),
):
    settings = get_settings(LoggingSettings)
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@app.command(name="version", help="Print the clipstack version.")
def version():
    console.print(f"[bold cyan]clipstack:[/bold cyan] {__version__}")


@app.command(name="watch", help="Capture the system clipboard until interrupted.")
def watch():
    engine = _open_engine(SystemClipboard())

    @engine.new_content.connect
    def _announce():
        history = engine.history()
        if history:
            console.print(f"[green]+[/green] {' | '.join(_entry_row(history[0])[:3])}")

    async def _run():
        engine.start()
        try:
            while True:
                await asyncio.sleep(3600)
        finally:
            engine.stop()

    console.print(
        f"[bold green]Watching clipboard ({len(engine.history())} entries loaded). "
        "Press Ctrl+C to stop.[/bold green]"
    )
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass
    console.print("[bold green]Stopped.[/bold green]")


@app.command(name="list", help="Show the clipboard history, newest first.")
def list_entries(
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum rows to show."),
    favorites: bool = typer.Option(False, "--favorites", help="Only favorites."),
):
    engine = _open_engine()
    entries = [e for e in engine.history() if e.is_favorite or not favorites]
    if not entries:
        console.print("[yellow]History is empty.[/yellow]")
        return
    table = Table(title=f"Clipboard history ({len(entries)} entries)")
    for column in ("ID", "Type", "Preview", "Captured", "Origin", "Fav"):
        table.add_column(column)
    for entry in entries[:limit]:
        table.add_row(*_entry_row(entry))
    console.print(table)


@app.command(name="show", help="Show one history entry.")
def show(
    entry_id: str = typer.Argument(..., help="Entry id or unique id prefix."),
    thumbnail: Optional[Path] = typer.Option(
        None, "--thumbnail", help="Write the entry's PNG thumbnail to this path."
    ),
):
    engine = _open_engine()
    entry = _resolve(engine, entry_id)
    console.print(f"[bold cyan]id:[/bold cyan] {entry.id}")
    console.print(f"[bold cyan]type:[/bold cyan] {entry.tag} ({entry.content_type})")
    console.print(f"[bold cyan]category:[/bold cyan] {entry.category.value}")
    console.print(f"[bold cyan]captured:[/bold cyan] {entry.captured_at.isoformat()}")
    console.print(f"[bold cyan]origin:[/bold cyan] {entry.provenance}")
    console.print(f"[bold cyan]favorite:[/bold cyan] {entry.is_favorite}")
    console.print(f"[bold cyan]hash:[/bold cyan] {entry.content_hash}")
    console.print(f"[bold cyan]preview:[/bold cyan] {escape(entry.preview)}")
    if thumbnail is None:
        return
    data = entry.thumbnail(engine.settings.thumbnail_dim)
    if data is None:
        console.print("[bold red]No thumbnail available for this entry.[/bold red]")
        raise typer.Exit(code=1)
    thumbnail.write_bytes(data)
    console.print(f"[bold green]Thumbnail written to {thumbnail}[/bold green]")


@app.command(name="delete", help="Delete a history entry.")
def delete(entry_id: str = typer.Argument(..., help="Entry id or unique id prefix.")):
    engine = _open_engine()
    entry = _resolve(engine, entry_id)
    engine.delete(entry.id)
    console.print(f"[bold green]Deleted {entry.id}[/bold green]")


@app.command(name="favorite", help="Toggle the favorite flag of a history entry.")
def favorite(entry_id: str = typer.Argument(..., help="Entry id or unique id prefix.")):
    engine = _open_engine()
    entry = _resolve(engine, entry_id)
    engine.toggle_favorite(entry.id)
    state = "Favorited" if not entry.is_favorite else "Unfavorited"
    console.print(f"[bold green]{state} {entry.id}[/bold green]")


@app.command(name="clear", help="Delete every history entry.")
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
):
    if not yes:
        typer.confirm("Delete the whole clipboard history?", abort=True)
    engine = _open_engine()
    count = len(engine.history())
    engine.clear()
    console.print(f"[bold green]Cleared {count} entries.[/bold green]")


@app.command(name="check", help="Verify the stored history record.")
def check():
    repository = HistoryRepository.from_settings(get_settings(ClipboardSettings))
    backups = repository.backups()
    for path in config_files():
        if path.exists():
            console.print(f"[bold cyan]config:[/bold cyan] {path}")
    if repository.verify():
        console.print(
            f"[bold green]History record OK[/bold green] ({len(backups)} backups)"
        )
        return
    console.print(
        f"[bold red]History record is corrupt.[/bold red] {len(backups)} backups "
        "available; run `clipstack restore` to recover."
    )
    raise typer.Exit(code=1)


@app.command(name="restore", help="Restore the newest readable backup.")
def restore():
    repository = HistoryRepository.from_settings(get_settings(ClipboardSettings))
    entries = repository.restore_latest_backup()
    if entries is None:
        console.print("[bold red]No readable backup found.[/bold red]")
        raise typer.Exit(code=1)
    console.print(f"[bold green]Restored {len(entries)} entries.[/bold green]")


# endregion

if __name__ == "__main__":
    app()
