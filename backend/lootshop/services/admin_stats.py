from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from lootshop.core import metrics
from lootshop.db.store import InMemoryStore
from lootshop.models import Coupon
from lootshop.services.reward_rules import RewardConfig, is_reward_order, orders_until_next_reward
from lootshop.services.rewards import Reward, RewardGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminStats:
    total_items_purchased: int
    total_purchase_amount: Decimal
    total_discount_amount: Decimal
    discount_codes: list[Coupon] = field(default_factory=list)


@dataclass(frozen=True)
class CouponCheckResult:
    triggered: bool
    order_count: int
    interval: int
    orders_needed: int = 0
    coupon: Reward | None = None


class AdminStatsService:
    def __init__(
        self,
        store: InMemoryStore,
        config: RewardConfig | None = None,
        generator: RewardGenerator | None = None,
    ) -> None:
        self.store = store
        self.config = config or RewardConfig()
        self.generator = generator or RewardGenerator(self.config)

    def get_stats(self) -> AdminStats:
        """Recompute totals from the full ledger on every call."""
        with self.store.transaction() as store:
            orders = store.orders.all()
            coupons = store.coupons.all()

        total_items = sum(item.quantity for order in orders for item in order.items)
        total_purchase = sum((order.final_amount for order in orders), start=Decimal("0"))
        total_discount = sum((order.discount_applied for order in orders), start=Decimal("0"))
        return AdminStats(
            total_items_purchased=total_items,
            total_purchase_amount=total_purchase,
            total_discount_amount=total_discount,
            discount_codes=coupons,
        )

    def trigger_coupon_check(self) -> CouponCheckResult:
        """Apply the Nth-order rule to the current ledger without placing an order."""
        interval = self.config.order_interval
        with self.store.transaction() as store:
            order_count = store.orders.count()
            if not is_reward_order(order_count, interval):
                return CouponCheckResult(
                    triggered=False,
                    order_count=order_count,
                    interval=interval,
                    orders_needed=orders_until_next_reward(order_count, interval),
                )
            reward = self.generator.generate_reward()
            store.coupons.add(reward.to_coupon())

        metrics.record_reward_issued()
        logger.info("reward_issued", extra={"tier": reward.tier.value, "order_position": order_count + 1, "source": "admin"})
        return CouponCheckResult(triggered=True, order_count=order_count, interval=interval, coupon=reward)
