"""Catalog management and integration inspection commands."""

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from src.storefront.core.exceptions import StorefrontError
from src.storefront.core.services.catalog.catalog_service import CatalogService
from src.storefront.core.services.database.db_session import DbSessionService
from src.storefront.core.services.shopify.connectivity import ShopifyConnectionTester
from src.storefront.core.utils.product_utils import format_price
from src.storefront.entities.catalog.product import ProductCreate, ProductSearch, ProductUpdate

console = Console()

products_app = typer.Typer(help="Inspect and edit the local product catalog")
shopify_app = typer.Typer(help="Check the Shopify integration")


@products_app.command("list")
def list_products(
    category: str | None = typer.Option(None, "--category", "-c", help="Category handle"),
    search: str | None = typer.Option(None, "--search", "-s", help="Text to match"),
    in_stock: bool | None = typer.Option(
        None, "--in-stock/--out-of-stock", help="Filter by availability"
    ),
) -> None:
    """List catalog products."""
    db_service = DbSessionService()
    with db_service.session_scope() as session:
        products = CatalogService(session).list_products(
            ProductSearch(category=category, search=search, in_stock=in_stock)
        )

    if not products:
        console.print("[yellow]No products found[/yellow]")
        return

    table = Table(title="Catalog products")
    table.add_column("Handle", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Category", style="magenta")
    table.add_column("Price", justify="right")
    table.add_column("In stock", style="yellow")
    table.add_column("Featured")

    for product in products:
        table.add_row(
            product.handle,
            product.title,
            product.category,
            format_price(product.price),
            "✅" if product.in_stock else "❌",
            "⭐" if product.featured else "",
        )

    console.print(table)
    console.print(f"\n[green]Found {len(products)} products[/green]")


@products_app.command("add")
def add_product(
    title: str = typer.Argument(..., help="Product title"),
    price: float = typer.Option(..., "--price", "-p", help="Price in pounds"),
    category: str = typer.Option(..., "--category", "-c", help="Category handle"),
    description: str = typer.Option(..., "--description", "-d", help="Product description"),
    handle: str | None = typer.Option(None, "--handle", help="Generated from the title when omitted"),
    concern: list[str] = typer.Option([], "--concern", help="Skin concern (repeatable)"),
    featured: bool = typer.Option(False, "--featured/--not-featured"),
    in_stock: bool = typer.Option(True, "--in-stock/--out-of-stock"),
) -> None:
    """Add a product to the local catalog."""
    try:
        data = ProductCreate(
            title=title,
            price=price,
            category=category,
            description=description,
            handle=handle,
            skin_concerns=concern,
            featured=featured,
            in_stock=in_stock,
        )
        with DbSessionService().session_scope() as session:
            product = CatalogService(session).create_product(data)
    except ValidationError as e:
        console.print(f"[red]❌ Invalid product: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(code=1) from e
    except StorefrontError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(
        f"[green]✅ Added {product.title} ({product.handle}) at {format_price(product.price)}[/green]"
    )


@products_app.command("stock")
def set_stock(
    handles: list[str] = typer.Argument(..., help="Product handles to update"),
    in_stock: bool = typer.Option(..., "--in-stock/--out-of-stock", help="New availability"),
) -> None:
    """Mark several catalog products as in or out of stock."""
    try:
        with DbSessionService().session_scope() as session:
            catalog = CatalogService(session)
            ids = [catalog.get_product(handle).id for handle in handles]
            updated = catalog.bulk_update_products(ids, ProductUpdate(in_stock=in_stock))
    except StorefrontError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    state = "in stock" if in_stock else "out of stock"
    console.print(f"[green]✅ Marked {len(updated)} products {state}[/green]")


@shopify_app.command("test")
def test_shopify(
    operations: bool = typer.Option(
        False, "--operations", "-o", help="Also read products, orders and locations"
    ),
) -> None:
    """Check Shopify Admin and Storefront API connectivity."""
    tester = ShopifyConnectionTester()
    report = asyncio.run(tester.test_connection())

    colour = {"success": "green", "partial": "yellow", "failed": "red"}[report.status]
    console.print(f"[{colour}]{report.message}[/{colour}]")
    for label, check in (("Admin API", report.admin_api), ("Storefront API", report.storefront_api)):
        icon = "✅" if check.ok else "❌"
        suffix = f" ({check.error})" if check.error else ""
        console.print(f"  {icon} {label}: {check.message}{suffix}")

    failed = report.status == "failed"
    if operations:
        ops = asyncio.run(tester.test_operations())
        console.print(f"\n{ops.message}")
        for name, check in ops.operations.items():
            icon = "✅" if check.ok else "❌"
            console.print(f"  {icon} {name}: {check.message}")
        failed = failed or not ops.success

    if failed:
        raise typer.Exit(code=1)
