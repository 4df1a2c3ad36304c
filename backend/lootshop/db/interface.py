from __future__ import annotations

from typing import Protocol

from lootshop.models import Coupon, Order, Product


# ---- Persistence contracts consumed by the services ----

class ProductLookup(Protocol):
    def get_product_by_id(self, product_id: str) -> Product | None:
        """Return the product or None when the id is unknown."""
        ...


class OrderLedgerAccess(Protocol):
    """Append-only record of completed orders."""

    def append(self, order: Order) -> None:
        ...

    def count(self) -> int:
        ...

    def all(self) -> list[Order]:
        """Return a copy; callers cannot mutate the ledger through it."""
        ...


class CouponStoreAccess(Protocol):
    def find_unused(self, code: str) -> Coupon | None:
        """Return a copy of the first unused coupon with this code."""
        ...

    def mark_used(self, code: str) -> bool:
        """Flip an unused coupon to used; False when none was found."""
        ...

    def add(self, coupon: Coupon) -> None:
        ...

    def all(self) -> list[Coupon]:
        ...
