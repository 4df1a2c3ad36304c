import re
from collections import Counter

import pytest

from lootshop.models.coupon import CouponTier
from lootshop.services import rewards
from lootshop.services.reward_rules import RewardConfig, build_tiers
from lootshop.services.rewards import RewardGenerator, generate_reward_code

CODE_RE = re.compile(r"^[A-Z0-9]{8}$")


def test_tier_distribution_matches_default_weights() -> None:
    generator = RewardGenerator()
    draws = 10_000
    counts = Counter(generator.generate_reward().tier for _ in range(draws))

    assert abs(counts[CouponTier.COMMON] / draws - 0.90) < 0.05
    assert abs(counts[CouponTier.RARE] / draws - 0.08) < 0.05
    assert abs(counts[CouponTier.LEGENDARY] / draws - 0.02) < 0.05


def test_discount_percent_is_fixed_by_tier() -> None:
    generator = RewardGenerator()
    expected = {CouponTier.COMMON: 10, CouponTier.RARE: 15, CouponTier.LEGENDARY: 25}
    for _ in range(2_000):
        reward = generator.generate_reward()
        assert reward.discount_percent == expected[reward.tier]


def test_boundary_draw_goes_to_earlier_tier(fixed_uniform) -> None:
    config = RewardConfig(
        tiers=build_tiers({CouponTier.COMMON: 1, CouponTier.RARE: 1, CouponTier.LEGENDARY: 2})
    )
    # total weight 4: cumulative boundaries at 1.0 and 2.0
    assert RewardGenerator(config, uniform=fixed_uniform(0.0)).select_tier() == CouponTier.COMMON
    assert RewardGenerator(config, uniform=fixed_uniform(0.25)).select_tier() == CouponTier.COMMON
    assert RewardGenerator(config, uniform=fixed_uniform(0.375)).select_tier() == CouponTier.RARE
    assert RewardGenerator(config, uniform=fixed_uniform(0.5)).select_tier() == CouponTier.RARE
    assert RewardGenerator(config, uniform=fixed_uniform(0.625)).select_tier() == CouponTier.LEGENDARY
    assert RewardGenerator(config, uniform=fixed_uniform(0.999)).select_tier() == CouponTier.LEGENDARY


def test_custom_weights_shift_the_distribution() -> None:
    config = RewardConfig(
        tiers=build_tiers({CouponTier.COMMON: 1, CouponTier.RARE: 1, CouponTier.LEGENDARY: 98})
    )
    generator = RewardGenerator(config)
    counts = Counter(generator.select_tier() for _ in range(5_000))
    assert counts[CouponTier.LEGENDARY] / 5_000 > 0.9


def test_generated_codes_are_uppercase_alphanumeric() -> None:
    generator = RewardGenerator()
    codes = [generator.generate_reward().code for _ in range(100)]
    assert all(CODE_RE.match(code) for code in codes), codes
    assert len(set(codes)) > 95


def test_code_is_extended_when_filtering_drops_characters() -> None:
    calls: list[int] = []

    def fake_token_bytes(n: int) -> bytes:
        calls.append(n)
        # 0xff bytes encode to "/" only; "AB" encodes to "QUI="
        return b"\xff" * n if len(calls) == 1 else b"AB"

    code = generate_reward_code(token_bytes=fake_token_bytes)
    assert code == "QUIQUIQU"
    assert calls == [6, 2, 2, 2]


def test_generator_uses_injected_sources(fixed_uniform) -> None:
    generator = RewardGenerator(uniform=fixed_uniform(0.99), token_bytes=lambda n: b"AB" * (n // 2))
    reward = generator.generate_reward()
    assert reward.tier == CouponTier.LEGENDARY
    assert reward.discount_percent == 25
    # b"ABABAB" encodes to "QUJBQkFC"
    assert reward.code == "QUJBQKFC"


def test_reward_converts_to_unused_coupon() -> None:
    coupon = rewards.generate_reward().to_coupon()
    assert coupon.is_used is False
    assert coupon.discount_percent in (10, 15, 25)


@pytest.mark.parametrize("draws", [1, 7])
def test_generator_has_no_side_effects_between_draws(fixed_uniform, draws: int) -> None:
    generator = RewardGenerator(uniform=fixed_uniform(0.1))
    tiers = {generator.generate_reward().tier for _ in range(draws)}
    assert tiers == {CouponTier.COMMON}
