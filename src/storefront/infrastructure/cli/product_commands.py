"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.deactivate_product import DeactivateProductHandler
from storefront.application.dto import ProductDTO
from storefront.application.list_products import ListProductsHandler, ShowProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import ProductCategory
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.persistence.seed import seed_catalog

CATEGORIES = [c.value for c in ProductCategory]


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, type=int, help="Price in cents (e.g. 25000).")
@click.option("--category", required=True, type=click.Choice(CATEGORIES))
@click.option("--items", required=True, help="Package contents as 'a;b;c'.")
@click.option("--description", default="")
@click.option("--badge", default="")
@click.pass_obj
def product_add(
    app, name: str, price: int, category: str, items: str, description: str, badge: str
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(app.conn))
    contents = [part.strip() for part in items.split(";") if part.strip()]

    try:
        product = handler.handle(
            name=name,
            price=price,
            category=category,
            items=contents,
            description=description,
            badge=badge,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.formatted_price}")


@click.command("list")
@click.option("--category", type=click.Choice(CATEGORIES), default=None)
@click.option("--all", "include_inactive", is_flag=True, help="Include deactivated products.")
@click.pass_obj
def product_list(app, category: str | None, include_inactive: bool) -> None:
    """List the catalog, cheapest first."""
    handler = ListProductsHandler(product_repo=product_repository(app.conn))
    products = handler.handle(category=category, active_only=not include_inactive)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<24} {'Category':<10} {'Price':>12}")
    click.echo("-" * 87)
    for p in products:
        dto = ProductDTO.from_product(p)
        marker = "" if dto.is_active else "  (inactive)"
        click.echo(
            f"{dto.id:<38} {dto.name:<24} {dto.category:<10} {dto.price_display:>12}{marker}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(app, product_id: str) -> None:
    """Show one product with its package contents."""
    handler = ShowProductHandler(product_repo=product_repository(app.conn))

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if product is None:
        raise click.ClickException(f"Product with ID '{product_id}' not found")

    dto = ProductDTO.from_product(product)
    click.echo(f"{dto.name}  ({dto.category}, {dto.price_display})")
    if dto.badge:
        click.echo(f"Badge: {dto.badge}")
    if not dto.is_active:
        click.echo("This product is no longer available.")
    for line in dto.items:
        click.echo(f"  - {line}")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_deactivate(app, product_id: str) -> None:
    """Withdraw a product from sale (soft delete)."""
    handler = DeactivateProductHandler(product_repo=product_repository(app.conn))

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deactivated.")


@click.command("seed")
@click.pass_obj
def product_seed(app) -> None:
    """Load the starter catalog into an empty database."""
    created = seed_catalog(product_repository(app.conn))
    if not created:
        click.echo("Catalog already has products; nothing seeded.")
        return
    for p in created:
        click.echo(f"Created: {p.name} ({p.formatted_price})")
