import itertools
from collections.abc import Generator
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from lootshop.core import metrics
from lootshop.db.store import InMemoryStore
from lootshop.models import CartItem, Order, Product


class FixedUniform:
    """Stand-in uniform source replaying the given draws in a loop."""

    def __init__(self, *values: float) -> None:
        self._values = itertools.cycle(values)

    def random(self) -> float:
        return next(self._values)


@pytest.fixture(autouse=True)
def _reset_metrics() -> Generator[None, None, None]:
    # Counters are process-global and would leak between tests.
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def store() -> InMemoryStore:
    store = InMemoryStore()
    store.products.add(Product(id="p1", name="Product p1", price=Decimal("100")))
    store.products.add(Product(id="p2", name="Product p2", price=Decimal("12.50")))
    return store


def _add_prior_orders(store: InMemoryStore, count: int) -> None:
    for idx in range(count):
        store.orders.append(
            Order(
                id=f"order-{idx + 1}",
                items=(CartItem(product_id="p1", quantity=1),),
                total_amount=Decimal("100"),
                discount_applied=Decimal("0"),
                final_amount=Decimal("100"),
                timestamp=datetime.now(timezone.utc),
            )
        )


@pytest.fixture
def fixed_uniform() -> type[FixedUniform]:
    return FixedUniform


@pytest.fixture
def add_prior_orders():
    return _add_prior_orders
