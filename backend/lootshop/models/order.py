from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from lootshop.models.cart import CartItem


@dataclass(frozen=True)
class Order:
    """A completed checkout. Never mutated once appended to the ledger."""

    id: str
    items: tuple[CartItem, ...]
    total_amount: Decimal
    discount_applied: Decimal
    final_amount: Decimal
    timestamp: datetime
