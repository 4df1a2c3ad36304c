from __future__ import annotations

import math
from dataclasses import dataclass, field

from lootshop.models.coupon import CouponTier
from lootshop.services.errors import InvalidConfiguration

DEFAULT_ORDER_INTERVAL = 4

# Tiers are walked in this order during weighted selection.
TIER_ORDER: tuple[CouponTier, ...] = (CouponTier.COMMON, CouponTier.RARE, CouponTier.LEGENDARY)

TIER_DISCOUNT_PERCENT: dict[CouponTier, int] = {
    CouponTier.COMMON: 10,
    CouponTier.RARE: 15,
    CouponTier.LEGENDARY: 25,
}

DEFAULT_TIER_WEIGHTS: dict[CouponTier, int] = {
    CouponTier.COMMON: 90,
    CouponTier.RARE: 8,
    CouponTier.LEGENDARY: 2,
}


@dataclass(frozen=True)
class RewardTier:
    tier: CouponTier
    discount_percent: int
    weight: int


def build_tiers(weights: dict[CouponTier, int] | None = None) -> tuple[RewardTier, ...]:
    weights = dict(DEFAULT_TIER_WEIGHTS if weights is None else weights)
    missing = [tier.value for tier in TIER_ORDER if tier not in weights]
    if missing:
        raise InvalidConfiguration(f"Missing reward weights for tiers: {', '.join(missing)}")
    return tuple(RewardTier(tier=tier, discount_percent=TIER_DISCOUNT_PERCENT[tier], weight=weights[tier]) for tier in TIER_ORDER)


@dataclass(frozen=True)
class RewardConfig:
    """Every Nth order earns a reward; tiers carry the weighted payout table.

    Validated on construction so a bad value stops the service at startup
    instead of failing individual checkouts.
    """

    order_interval: int = DEFAULT_ORDER_INTERVAL
    tiers: tuple[RewardTier, ...] = field(default_factory=build_tiers)

    def __post_init__(self) -> None:
        if isinstance(self.order_interval, bool) or not isinstance(self.order_interval, int):
            raise InvalidConfiguration(f"Reward order interval must be an integer, got {self.order_interval!r}")
        if self.order_interval < 1:
            raise InvalidConfiguration(f"Reward order interval must be >= 1, got {self.order_interval}")
        # Only weights are configurable; order and payouts are fixed.
        if tuple(tier.tier for tier in self.tiers) != TIER_ORDER:
            raise InvalidConfiguration(
                f"Reward tiers must be {', '.join(t.value for t in TIER_ORDER)} in that order, "
                f"got {', '.join(t.tier.value for t in self.tiers) or 'none'}"
            )
        for tier in self.tiers:
            if tier.discount_percent != TIER_DISCOUNT_PERCENT[tier.tier]:
                raise InvalidConfiguration(
                    f"Reward tier {tier.tier.value} pays {TIER_DISCOUNT_PERCENT[tier.tier]}%, got {tier.discount_percent!r}"
                )
            if isinstance(tier.weight, bool) or not isinstance(tier.weight, int) or tier.weight <= 0:
                raise InvalidConfiguration(f"Reward weight for {tier.tier.value} must be a positive integer, got {tier.weight!r}")

    @property
    def total_weight(self) -> int:
        return sum(tier.weight for tier in self.tiers)

    def tier_for(self, tier: CouponTier) -> RewardTier:
        for candidate in self.tiers:
            if candidate.tier == tier:
                return candidate
        raise KeyError(tier)

    def probabilities(self) -> dict[CouponTier, float]:
        total = self.total_weight
        return {tier.tier: tier.weight / total for tier in self.tiers}


def is_reward_order(order_count: int, interval: int) -> bool:
    """Whether the order placed after `order_count` recorded orders earns a reward."""
    return (order_count + 1) % interval == 0


def orders_until_next_reward(order_count: int, interval: int) -> int:
    next_reward_order = math.ceil((order_count + 1) / interval) * interval
    return next_reward_order - order_count
