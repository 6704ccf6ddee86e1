"""Typer CLI for ViralGif-Engine."""

import asyncio

import typer
from rich.console import Console

app = typer.Typer(name="viralgif", help="ViralGif-Engine: viral marketing text and GIF generator")
console = Console()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
):
    """Start the ViralGif-Engine API server."""
    import uvicorn
    from viralgif_engine.app import create_app

    console.print(f"[bold green]Starting ViralGif-Engine on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command("init-db")
def init_db():
    """Create database tables."""
    from viralgif_engine.common.config import get_settings
    from viralgif_engine.common.database import DatabaseManager

    async def _run():
        db = DatabaseManager(get_settings())
        await db.init()
        await db.create_all()
        await db.close()

    asyncio.run(_run())
    console.print("[bold green]Database ready[/bold green]")


@app.command()
def industries():
    """List industries with both viral patterns and GIF templates."""
    from viralgif_engine.catalog.provider import StaticDataProvider
    from viralgif_engine.common.config import get_settings
    from viralgif_engine.common.exceptions import CatalogError

    try:
        names = StaticDataProvider(get_settings().data_dir or None).industries()
    except CatalogError as e:
        console.print(f"[bold red]{e.code}[/bold red] — {e.message}")
        raise typer.Exit(1)
    for name in names:
        console.print(f"  {name}")


@app.command("create-user")
def create_user(
    email: str = typer.Argument(..., help="Email address of the new user"),
    tier: str = typer.Option("free", help="Subscription tier"),
):
    """Create a registered user and print its id."""
    from viralgif_engine.accounts.service import UserStore
    from viralgif_engine.common.config import get_settings
    from viralgif_engine.common.database import DatabaseManager

    async def _run() -> str:
        db = DatabaseManager(get_settings())
        await db.init()
        await db.create_all()
        try:
            async with db.get_session() as session:
                user = await UserStore().create_user(session, email, subscription_tier=tier)
                return user.id
        finally:
            await db.close()

    user_id = asyncio.run(_run())
    console.print(f"[bold]{user_id}[/bold]")


@app.command("issue-token")
def issue_token(
    user_id: str = typer.Argument(..., help="User id to sign a session for"),
):
    """Print a bearer session token for a user (offline, no DB required)."""
    from viralgif_engine.common.config import get_settings
    from viralgif_engine.common.security import SessionVerifier

    # Plain echo so the token can be piped without Rich wrapping it.
    typer.echo(SessionVerifier(get_settings()).issue(user_id))


@app.command()
def health(
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
):
    """Check ViralGif-Engine server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] — v{data['version']}")
    except (httpx.HTTPError, ValueError, KeyError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
