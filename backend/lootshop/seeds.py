import logging
from decimal import Decimal
from typing import TypedDict

from lootshop.db.store import InMemoryStore
from lootshop.models import Product

logger = logging.getLogger(__name__)


class SeedProduct(TypedDict):
    id: str
    name: str
    price: Decimal


DEFAULT_PRODUCTS: list[SeedProduct] = [
    {"id": "prod-1", "name": "Wireless Mouse", "price": Decimal("29.99")},
    {"id": "prod-2", "name": "Mechanical Keyboard", "price": Decimal("89.99")},
    {"id": "prod-3", "name": "USB-C Hub", "price": Decimal("49.99")},
    {"id": "prod-4", "name": "Laptop Stand", "price": Decimal("39.99")},
    {"id": "prod-5", "name": "Webcam HD", "price": Decimal("79.99")},
    {"id": "prod-6", "name": "Wireless Headphones", "price": Decimal("129.99")},
    {"id": "prod-7", "name": "Monitor Stand", "price": Decimal("34.99")},
    {"id": "prod-8", "name": "Desk Mat", "price": Decimal("24.99")},
]


def seed_products(store: InMemoryStore, products: list[SeedProduct] | None = None) -> int:
    """Load the demo catalog into an empty store. Returns the number added."""
    rows = DEFAULT_PRODUCTS if products is None else products
    with store.transaction():
        if store.products.count():
            return 0
        for row in rows:
            store.products.add(Product(id=row["id"], name=row["name"], price=Decimal(row["price"])))
    logger.info("Seeded %s products", len(rows))
    return len(rows)
