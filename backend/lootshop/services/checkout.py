from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from lootshop.core import metrics
from lootshop.db.store import InMemoryStore
from lootshop.models import CartItem, Order
from lootshop.services import pricing
from lootshop.services.errors import EmptyCart, InvalidOrUsedCoupon, ShopError
from lootshop.services.reward_rules import RewardConfig, is_reward_order
from lootshop.services.rewards import Reward, RewardGenerator

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CheckoutResult:
    order: Order
    discount_applied: Decimal
    final_amount: Decimal
    reward_coupon: Reward | None = None


class CheckoutEngine:
    """Turns a cart into an order, redeeming a coupon and issuing Nth-order rewards.

    The engine keeps no state of its own; every call runs inside the store's
    transaction so coupon redemption, the order-count read and the order
    append cannot interleave with another checkout.
    """

    def __init__(
        self,
        store: InMemoryStore,
        config: RewardConfig | None = None,
        generator: RewardGenerator | None = None,
    ) -> None:
        self.store = store
        self.config = config or RewardConfig()
        self.generator = generator or RewardGenerator(self.config)

    def process_checkout(self, cart_items: Sequence[CartItem], discount_code: str | None = None) -> CheckoutResult:
        items = tuple(cart_items)
        try:
            with self.store.transaction() as store:
                return self._process(store, items, discount_code)
        except ShopError as exc:
            metrics.record_checkout_rejected()
            logger.warning("checkout_rejected", extra={"reason": exc.code, "detail": str(exc)})
            raise

    def _process(self, store: InMemoryStore, items: tuple[CartItem, ...], discount_code: str | None) -> CheckoutResult:
        if not items:
            raise EmptyCart()

        # Everything that can fail runs before the first mutation.
        subtotal = pricing.cart_subtotal(store.products, items)

        discount_applied = pricing.ZERO
        coupon = None
        # Blank codes mean no coupon.
        if discount_code and discount_code.strip():
            coupon = store.coupons.find_unused(discount_code)
            if coupon is None:
                raise InvalidOrUsedCoupon(discount_code)
            discount_applied = pricing.percent_discount(subtotal, coupon.discount_percent)

        final_amount = subtotal - discount_applied

        order_count = store.orders.count()
        reward = self.generator.generate_reward() if is_reward_order(order_count, self.config.order_interval) else None

        order = Order(
            id=str(uuid.uuid4()),
            items=items,
            total_amount=subtotal,
            discount_applied=discount_applied,
            final_amount=final_amount,
            timestamp=_now(),
        )

        if coupon is not None:
            store.coupons.mark_used(coupon.code)
            metrics.record_coupon_redeemed()
            logger.info("coupon_redeemed", extra={"coupon_code": coupon.code, "order_id": order.id})
        if reward is not None:
            store.coupons.add(reward.to_coupon())
            metrics.record_reward_issued()
            logger.info(
                "reward_issued",
                extra={"tier": reward.tier.value, "order_position": order_count + 1, "order_id": order.id},
            )
        store.orders.append(order)
        metrics.record_checkout()

        return CheckoutResult(
            order=order,
            discount_applied=discount_applied,
            final_amount=final_amount,
            reward_coupon=reward,
        )
