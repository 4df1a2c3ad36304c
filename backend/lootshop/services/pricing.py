from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from lootshop.db.interface import ProductLookup
from lootshop.models import CartItem
from lootshop.services.errors import ProductNotFound

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def line_total(price: Decimal, quantity: int) -> Decimal:
    return Decimal(price) * int(quantity)


def cart_subtotal(products: ProductLookup, items: Iterable[CartItem], *, strict: bool = True) -> Decimal:
    """Sum quantity x unit price without rounding.

    With `strict` an unknown product raises `ProductNotFound`; otherwise the
    line is skipped.
    """
    subtotal = ZERO
    for item in items:
        product = products.get_product_by_id(item.product_id)
        if product is None:
            if strict:
                raise ProductNotFound(item.product_id)
            continue
        subtotal += line_total(product.price, item.quantity)
    return subtotal


def percent_discount(subtotal: Decimal, percent: int) -> Decimal:
    return subtotal * Decimal(percent) / HUNDRED
