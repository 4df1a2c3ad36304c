from __future__ import annotations

import base64
import re
import secrets
from dataclasses import dataclass
from typing import Callable, Protocol

from lootshop.models.coupon import Coupon, CouponTier
from lootshop.services.reward_rules import RewardConfig

REWARD_CODE_LENGTH = 8
_CODE_ENTROPY_BYTES = 6
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")


class UniformSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class Reward:
    code: str
    discount_percent: int
    tier: CouponTier

    def to_coupon(self) -> Coupon:
        return Coupon(code=self.code, discount_percent=self.discount_percent, tier=self.tier, is_used=False)


def _alnum_chunk(raw: bytes) -> str:
    return _NON_ALNUM_RE.sub("", base64.b64encode(raw).decode("ascii")).upper()


def generate_reward_code(
    *,
    length: int = REWARD_CODE_LENGTH,
    token_bytes: Callable[[int], bytes] = secrets.token_bytes,
) -> str:
    """Build an upper-case alphanumeric code from secure random bytes.

    Base64 output may contain `+`, `/` and `=` which are dropped; more bytes
    are drawn until the code is long enough. Codes are not checked against
    issued coupons: upper-casing leaves 36 symbols, so an 8-character code
    carries about 41 bits (log2(36 ** 8)) and a collision is an accepted risk.
    """
    code = _alnum_chunk(token_bytes(_CODE_ENTROPY_BYTES))
    while len(code) < length:
        code += _alnum_chunk(token_bytes(2))
    return code[:length]


class RewardGenerator:
    """Weighted "loot box" draw: picks a tier, its fixed discount and a fresh code."""

    def __init__(
        self,
        config: RewardConfig | None = None,
        *,
        uniform: UniformSource | None = None,
        token_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        self.config = config or RewardConfig()
        self._uniform = uniform or secrets.SystemRandom()
        self._token_bytes = token_bytes

    def select_tier(self) -> CouponTier:
        # r lies in [0, total); a draw landing exactly on a cumulative boundary
        # belongs to the earlier tier.
        tiers = self.config.tiers
        r = self._uniform.random() * self.config.total_weight
        cumulative = 0
        for tier in tiers:
            cumulative += tier.weight
            if r <= cumulative:
                return tier.tier
        return tiers[-1].tier

    def generate_reward(self) -> Reward:
        tier = self.select_tier()
        return Reward(
            code=generate_reward_code(token_bytes=self._token_bytes),
            discount_percent=self.config.tier_for(tier).discount_percent,
            tier=tier,
        )


def generate_reward(config: RewardConfig | None = None) -> Reward:
    return RewardGenerator(config).generate_reward()
