"""Main CLI application module."""

import typer

from .catalog_commands import products_app, shopify_app
from .db_commands import db_app
from .server_commands import serve

# Create the main CLI application
app = typer.Typer(
    help="🧴 Storefront admin CLI - serve the API and manage the catalog",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command("serve")(serve)
app.add_typer(db_app, name="db")
app.add_typer(products_app, name="products")
app.add_typer(shopify_app, name="shopify")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
