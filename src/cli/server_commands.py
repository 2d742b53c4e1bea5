"""Run the API server."""

import os

import typer
import uvicorn
from rich.console import Console

from src.storefront.runtime.settings import EnvironmentVariables

console = Console()


def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (APP_HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (APP_PORT)"),
    reload: bool | None = typer.Option(
        None, "--reload/--no-reload", help="Restart on code changes (APP_RELOAD)"
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="Path to config.yaml (APP_CONFIG_FILE)"
    ),
) -> None:
    """Start the storefront admin API with uvicorn."""
    settings = EnvironmentVariables()
    if config_file:
        # Read when the app module loads its configuration
        os.environ["APP_CONFIG_FILE"] = config_file

    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(
        f"[bold green]🚀 Starting storefront API[/bold green] on "
        f"[cyan]{bind_host}:{bind_port}[/cyan] ({settings.environment})"
    )
    uvicorn.run(
        "src.storefront.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=settings.reload if reload is None else reload,
        access_log=False,
    )
