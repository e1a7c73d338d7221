"""CLI commands for the bookings API."""

import asyncio

import typer
from rich.console import Console

from bookings_api import __version__
from bookings_api.core.config import get_settings
from bookings_api.storage.database.base import close_db, get_session_maker, init_db
from bookings_api.storage.database.models import User
from bookings_api.storage.database.repository import ApiKeyRepository

app = typer.Typer(name="bookings-api", help="Bookings API CLI")
console = Console()


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"[bold green]Bookings API v{__version__}[/bold green]")


@app.command("init-db")
def init_db_command() -> None:
    """Create database tables."""

    async def _run() -> None:
        try:
            await init_db()
        finally:
            await close_db()

    asyncio.run(_run())
    console.print("[green]✓ Database initialized[/green]")


@app.command("create-api-key")
def create_api_key(
    user_id: int,
    note: str = typer.Option(None, help="Free-form note stored with the key"),
) -> None:
    """Create an API key for a user and print it once."""

    async def _run() -> str | None:
        try:
            async with get_session_maker()() as session:
                if await session.get(User, user_id) is None:
                    return None
                _, raw_key = await ApiKeyRepository(session).create(user_id, note=note)
                await session.commit()
                return raw_key
        finally:
            await close_db()

    raw_key = asyncio.run(_run())
    if raw_key is None:
        console.print(f"[red]User {user_id} not found[/red]")
        raise typer.Exit(code=1)
    console.print(f"[bold]{raw_key}[/bold]")


@app.command()
def serve(
    host: str = typer.Option(None, help="Host to bind"),
    port: int = typer.Option(None, help="Port to bind"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Start API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(f"[yellow]Starting server on {host}:{port}[/yellow]")
    uvicorn.run("bookings_api.api.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
