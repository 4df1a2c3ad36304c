from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from lootshop.db.store import InMemoryStore
from lootshop.models import CartItem
from lootshop.services import pricing
from lootshop.services.errors import ProductNotFound


@dataclass(frozen=True)
class CartSummary:
    items: list[CartItem]
    subtotal: Decimal


def get_cart(store: InMemoryStore) -> CartSummary:
    with store.transaction():
        items = store.cart.items()
        # Lines whose product disappeared are shown but not priced.
        subtotal = pricing.cart_subtotal(store.products, items, strict=False)
    return CartSummary(items=items, subtotal=subtotal)


def add_item(store: InMemoryStore, product_id: str, quantity: int) -> CartSummary:
    with store.transaction():
        if store.products.get_product_by_id(product_id) is None:
            raise ProductNotFound(product_id)
        store.cart.add(product_id, quantity)
        return get_cart(store)


def clear_cart(store: InMemoryStore) -> None:
    store.cart.clear()
