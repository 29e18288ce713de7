from __future__ import annotations

import asyncio
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape

from contributions.config import Settings, get_settings
from contributions.infra.db.errors import DatabaseError
from contributions.infra.db.session import close_db, connect_store


app = typer.Typer(help="Contribution store CLI")
console = Console()


def _settings(database_url: Optional[str]) -> Settings:
    if database_url:
        return Settings(database_url=database_url)
    return get_settings()


DatabaseUrlOption = typer.Option(
    None,
    "--database-url",
    envvar="DATABASE_URL",
    help="Database connection URL",
)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload (dev only)"),
):
    """Start the contribution store API server."""
    console.print(f"[green]Starting contribution store at http://{host}:{port}[/green]")
    uvicorn.run(
        "contributions.main:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


async def _init_db(settings: Settings) -> None:
    engine, _ = await connect_store(settings)
    await close_db(engine)


@app.command("init-db")
def init_db(database_url: Optional[str] = DatabaseUrlOption):
    """Create the contributors table if it does not exist."""
    settings = _settings(database_url)
    try:
        asyncio.run(_init_db(settings))
    except DatabaseError as e:
        console.print(f"[red]Unable to initialize database: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    console.print("[green]Database initialized[/green]")


async def _has_contributed(settings: Settings, uid: str) -> bool:
    engine, store = await connect_store(settings)
    try:
        return await store.has_contributed(uid)
    finally:
        await close_db(engine)


@app.command()
def status(
    uid: str = typer.Argument(..., help="Contributor uid"),
    database_url: Optional[str] = DatabaseUrlOption,
):
    """Show whether a uid has contributed."""
    settings = _settings(database_url)
    try:
        contributed = asyncio.run(_has_contributed(settings, uid))
    except DatabaseError as e:
        console.print(f"[red]error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if contributed:
        console.print(f"{escape(uid)} has contributed")
    else:
        console.print(f"{escape(uid)} has not contributed")


@app.command()
def version():
    """Show version."""
    console.print(get_settings().app_version)


if __name__ == "__main__":
    app()
