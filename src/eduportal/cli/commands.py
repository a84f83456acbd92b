"""CLI commands for eduportal.

- serve: run the web app under uvicorn
- show-config: print the resolved configuration
- check-backend: verify the Supabase project is reachable
"""

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from eduportal.backend.client import create_backend_client
from eduportal.backend.repository import ContentRepository
from eduportal.config.app_config import load_app_config
from eduportal.errors import BackendConfigError, StoreError

app = typer.Typer(
    name="eduportal",
    help="Class-scoped practice questions backed by Supabase.",
    no_args_is_help=True,
)

console = Console()


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the web app."""
    uvicorn.run("eduportal.web.api:app", host=host, port=port, reload=reload)


@app.command(name="show-config")
def show_config() -> None:
    """Print the resolved configuration (the key itself is never shown)."""
    config = load_app_config(force_reload=True)

    table = Table(title="eduportal configuration", show_header=True)
    table.add_column("Setting")
    table.add_column("Value")

    key_state = "set" if config.backend.get_anon_key() else "[red]missing[/red]"
    table.add_row("backend.url", config.backend.url or "[red]missing[/red]")
    table.add_row("backend.anon_key_env", f"{config.backend.anon_key_env} ({key_state})")
    table.add_row("site.environment", config.site.environment)
    table.add_row("site.protect_site", str(config.site.protect_site))
    table.add_row("site.locked", str(config.site.is_locked))
    table.add_row("session.access_cookie", config.session.access_cookie)
    table.add_row("session.refresh_cookie", config.session.refresh_cookie)
    table.add_row("session.secure_cookies", str(config.session.secure_cookies))

    console.print(table)


@app.command(name="check-backend")
def check_backend() -> None:
    """List the public classes to confirm the backend answers."""
    config = load_app_config()

    try:
        client = create_backend_client(config.backend)
        classes = ContentRepository(client).list_classes()
    except BackendConfigError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)
    except StoreError as e:
        console.print(f"[red]✗ Store error: {e.message}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Backend reachable[/green] ({len(classes)} classes)")
    for cls in classes:
        console.print(f"  [dim]{cls.id}[/dim] {cls.name}")
