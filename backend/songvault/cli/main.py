"""Songvault CLI - Main entry point."""
import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from songvault.errors import CatalogError

app = typer.Typer(
    name="songvault",
    help="Songvault - Personal music catalog",
    add_completion=True,
)

console = Console()


@app.command()
def version():
    """Show version information."""
    from songvault import __version__
    console.print(f"Songvault v{__version__}")


@app.command()
def status():
    """Check system status."""
    from pathlib import Path
    from songvault.config import settings

    table = Table(title="Songvault Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")

    try:
        from sqlalchemy import text
        from songvault.database import engine
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        table.add_row("Database", "Connected")
    except Exception as e:
        table.add_row("Database", f"[red]Error: {e}[/red]")

    upload_dir = Path(settings.upload_dir)
    if upload_dir.exists():
        table.add_row("Uploads", f"OK ({upload_dir})")
    else:
        table.add_row("Uploads", f"[yellow]Missing ({upload_dir})[/yellow]")

    console.print(table)


@app.command("list")
def list_songs(
    mode: str = typer.Option("songs", "--mode", "-m", help="songs, discover or liked"),
):
    """List songs in the catalog."""
    from songvault.database import SessionLocal
    from songvault.services.catalog import CatalogQuery

    db = SessionLocal()
    try:
        songs = CatalogQuery(db).list_songs(mode)
    finally:
        db.close()

    if not songs:
        console.print("[yellow]No songs found[/yellow]")
        return

    table = Table(title=f"Songs ({mode})")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Artist")
    table.add_column("Album")
    table.add_column("Time", justify="right")
    table.add_column("Liked", justify="center")

    for song in songs:
        table.add_row(
            str(song.id),
            song.title,
            song.artist or "",
            song.album or "",
            song.duration_formatted,
            "*" if song.is_liked else "",
        )

    console.print(table)


@app.command()
def register(
    path: str = typer.Argument(..., help="Path to an audio file on this machine"),
):
    """Register an audio file that already exists on disk."""
    from songvault.database import SessionLocal
    from songvault.services.ingest import IngestService

    db = SessionLocal()
    try:
        result = asyncio.run(IngestService(db).register_local_path(path))
        if result.created:
            console.print(f"[green]Registered:[/green] {result.song.title} (ID: {result.song.id})")
        else:
            console.print(f"[yellow]Already registered[/yellow] (ID: {result.song.id})")
    except CatalogError as e:
        console.print(f"[red]{e.message}[/red]")
        if e.detail:
            console.print(f"  {e.detail}")
        raise typer.Exit(1)
    finally:
        db.close()


@app.command()
def edit(
    song_id: int = typer.Argument(..., help="Song ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    artist: Optional[str] = typer.Option(None, "--artist", "-a", help="New artist name"),
    album: Optional[str] = typer.Option(None, "--album", "-A", help="New album title"),
    liked: bool = typer.Option(False, "--liked/--not-liked", help="Liked state"),
):
    """Edit a song's metadata."""
    from songvault.database import SessionLocal
    from songvault.services.editor import SongEditor

    db = SessionLocal()
    try:
        data = SongEditor(db).edit_song(
            song_id,
            title=title,
            artist_name=artist,
            album_title=album,
            is_liked=liked,
        )
        console.print(f"[green]Updated:[/green] {data.title} - {data.artist} / {data.album}")
    except CatalogError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()


@app.command("db-init")
def db_init():
    """Initialize database tables (run migrations)."""
    import subprocess
    import os

    backend_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

    console.print("Running database migrations...")
    result = subprocess.run(
        ["alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )

    if result.returncode == 0:
        console.print("[green]Database initialized successfully[/green]")
        if result.stdout:
            console.print(result.stdout)
    else:
        console.print("[red]Migration failed[/red]")
        console.print(result.stderr)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
