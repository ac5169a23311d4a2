import json
import logging

import click
from flask.cli import AppGroup

from printshop import db
from printshop.database import atomic
from printshop.models import Product, ProductVariation


def load_catalog(entries: list) -> int:
    """Insert products (with nested ``variations``) and return how many were added."""
    count = 0
    with atomic('Failed to load catalog'):
        for entry in entries:
            product = Product(
                name          = entry['name'],
                description   = entry.get('description'),
                base_price    = float(entry.get('base_price') or 0.0),
                example_image = entry.get('example_image'),
            )
            db.session.add(product)
            db.session.flush()
            for v in entry.get('variations') or []:
                db.session.add(ProductVariation(
                    product_id = product.id,
                    size       = v['size'],
                    price      = float(v['price']),
                    accessory  = v.get('accessory') or 'None',
                    quantity   = v.get('quantity'),
                ))
            count += 1
    return count


catalog_cli = AppGroup("catalog", help="Product catalog commands.")


@catalog_cli.command("seed")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def seed_command(path: str) -> None:
    """Load products and variations from a JSON file."""
    with open(path, encoding="utf-8") as fh:
        entries = json.load(fh)
    added = load_catalog(entries)
    logging.info("catalog seeded from %s products=%s", path, added)
    click.echo(f"Added {added} products")


@catalog_cli.command("list")
def list_command() -> None:
    for p in Product.query.order_by(Product.id).all():
        click.echo(f"{p.id:>4}  {p.name}")
        for v in p.variations:
            click.echo(f"      #{v.id} {v.size} / {v.accessory}  {v.price:.2f}")
