from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from lootshop.db.interface import CouponStoreAccess, OrderLedgerAccess
from lootshop.models import CartItem, Coupon, Order, Product


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


class ProductCatalog:
    def __init__(self, lock: threading.RLock) -> None:
        self._lock = lock
        self._products: dict[str, Product] = {}

    def add(self, product: Product) -> None:
        with self._lock:
            self._products[product.id] = product

    def get_product_by_id(self, product_id: str) -> Product | None:
        with self._lock:
            return self._products.get(product_id)

    def all(self) -> list[Product]:
        with self._lock:
            return list(self._products.values())

    def count(self) -> int:
        with self._lock:
            return len(self._products)


class OrderLedger:
    def __init__(self, lock: threading.RLock) -> None:
        self._lock = lock
        self._orders: list[Order] = []

    def append(self, order: Order) -> None:
        with self._lock:
            self._orders.append(order)

    def count(self) -> int:
        with self._lock:
            return len(self._orders)

    def all(self) -> list[Order]:
        with self._lock:
            return list(self._orders)


class CouponStore:
    """Issued coupons, in issue order.

    Codes are stored as issued and compared after normalization.
    """

    def __init__(self, lock: threading.RLock) -> None:
        self._lock = lock
        self._coupons: list[Coupon] = []

    def add(self, coupon: Coupon) -> None:
        with self._lock:
            self._coupons.append(replace(coupon))

    def _first_unused(self, code: str) -> Coupon | None:
        wanted = normalize_code(code)
        for coupon in self._coupons:
            if normalize_code(coupon.code) == wanted and not coupon.is_used:
                return coupon
        return None

    def find_unused(self, code: str) -> Coupon | None:
        with self._lock:
            coupon = self._first_unused(code)
            return replace(coupon) if coupon else None

    def mark_used(self, code: str) -> bool:
        with self._lock:
            coupon = self._first_unused(code)
            if coupon is None:
                return False
            coupon.is_used = True
            return True

    def all(self) -> list[Coupon]:
        with self._lock:
            return [replace(coupon) for coupon in self._coupons]


class CartStore:
    """The single shared shopping cart."""

    def __init__(self, lock: threading.RLock) -> None:
        self._lock = lock
        self._items: list[CartItem] = []

    def items(self) -> list[CartItem]:
        with self._lock:
            return list(self._items)

    def add(self, product_id: str, quantity: int) -> None:
        with self._lock:
            for idx, item in enumerate(self._items):
                if item.product_id == product_id:
                    self._items[idx] = CartItem(product_id=product_id, quantity=item.quantity + quantity)
                    return
            self._items.append(CartItem(product_id=product_id, quantity=quantity))

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class InMemoryStore:
    """Process-local state shared by checkout, admin and cart services.

    One re-entrant lock guards every collection; `transaction()` holds it
    across a multi-step read-validate-mutate sequence so the sequence is
    linearizable against every other store operation.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.products = ProductCatalog(self._lock)
        self.orders: OrderLedgerAccess = OrderLedger(self._lock)
        self.coupons: CouponStoreAccess = CouponStore(self._lock)
        self.cart = CartStore(self._lock)

    @contextmanager
    def transaction(self) -> Iterator["InMemoryStore"]:
        with self._lock:
            yield self
