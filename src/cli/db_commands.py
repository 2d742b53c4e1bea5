"""Catalog database maintenance commands."""

import typer
from rich.console import Console

console = Console()

db_app = typer.Typer(help="Manage the catalog database")


@db_app.command("init")
def init(
    seed: bool = typer.Option(True, "--seed/--no-seed", help="Load the sample catalogue"),
) -> None:
    """Create the catalog tables, seeding sample data into an empty database."""
    from src.storefront.runtime.init_db import init_db

    try:
        seeded = init_db(seed=seed)
    except Exception as e:
        console.print(f"[red]❌ Database initialization failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print("[green]✅ Catalog tables ready[/green]")
    if seed:
        if seeded:
            console.print(f"[green]Seeded {seeded} sample products[/green]")
        else:
            console.print("[yellow]Catalog already had products; nothing seeded[/yellow]")
