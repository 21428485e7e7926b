"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from lojasocial.application.add_product import AddProductHandler
from lojasocial.application.dto import product_to_dto
from lojasocial.domain.exceptions import DomainException
from lojasocial.domain.service.catalog import Catalog
from lojasocial.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID (usually the barcode).")
@click.option("--name", required=True, help="Product name.")
@click.option("--brand", default="", help="Brand.")
@click.option(
    "--category",
    default="Alimentar",
    show_default=True,
    help="Alimentar, Casa or Higiene Pessoal (or the code 1/2/3).",
)
def product_add(product_id: str, name: str, brand: str, category: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(unit_of_work())

    try:
        product = handler.handle(
            product_id=product_id, name=name, brand=brand, category=category
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.id}' ({product.name}, {product.category}) added")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = [product_to_dto(p) for p in Catalog(unit_of_work()).list_products()]

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<16} {'Name':<24} {'Brand':<14} {'Category':<16}")
    click.echo("-" * 73)
    for p in products:
        click.echo(f"{p.id:<16} {p.name:<24} {p.brand:<14} {p.category:<16}")
