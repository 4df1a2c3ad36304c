from decimal import Decimal

from lootshop.models import CartItem, Coupon, CouponTier
from lootshop.services.admin_stats import AdminStatsService
from lootshop.services.checkout import CheckoutEngine
from lootshop.services.reward_rules import RewardConfig


def test_stats_on_empty_store(store) -> None:
    stats = AdminStatsService(store).get_stats()
    assert stats.total_items_purchased == 0
    assert stats.total_purchase_amount == Decimal("0")
    assert stats.total_discount_amount == Decimal("0")
    assert stats.discount_codes == []


def test_stats_sum_the_ledger(store) -> None:
    store.coupons.add(Coupon(code="TEN", discount_percent=10, tier=CouponTier.COMMON))
    engine = CheckoutEngine(store)
    engine.process_checkout([CartItem("p1", 2)], "TEN")  # 200 - 20
    engine.process_checkout([CartItem("p2", 4), CartItem("p1", 1)])  # 150

    stats = AdminStatsService(store).get_stats()

    assert stats.total_items_purchased == 7
    assert stats.total_purchase_amount == Decimal("330")
    assert stats.total_discount_amount == Decimal("20")
    assert [(c.code, c.is_used) for c in stats.discount_codes] == [("TEN", True)]


def test_stats_list_reward_coupons(store) -> None:
    engine = CheckoutEngine(store)
    for _ in range(4):
        engine.process_checkout([CartItem("p1", 1)])

    stats = AdminStatsService(store).get_stats()

    assert len(stats.discount_codes) == 1
    assert stats.discount_codes[0].is_used is False
    assert stats.total_items_purchased == 4


def test_trigger_not_met_reports_orders_needed(store, add_prior_orders) -> None:
    add_prior_orders(store, 1)
    check = AdminStatsService(store).trigger_coupon_check()

    assert check.triggered is False
    assert check.order_count == 1
    assert check.interval == 4
    assert check.orders_needed == 3
    assert check.coupon is None
    assert store.coupons.all() == []


def test_trigger_met_issues_coupon(store, add_prior_orders) -> None:
    add_prior_orders(store, 3)
    check = AdminStatsService(store).trigger_coupon_check()

    assert check.triggered is True
    assert check.coupon is not None
    saved = store.coupons.all()
    assert [(c.code, c.tier, c.is_used) for c in saved] == [(check.coupon.code, check.coupon.tier, False)]
    # probing never places an order
    assert store.orders.count() == 3


def test_trigger_uses_configured_interval(store, add_prior_orders) -> None:
    add_prior_orders(store, 1)
    check = AdminStatsService(store, RewardConfig(order_interval=2)).trigger_coupon_check()
    assert check.triggered is True


def test_stats_report_coupon_codes_as_issued(store) -> None:
    store.coupons.add(Coupon(code="ten", discount_percent=10, tier=CouponTier.COMMON))
    CheckoutEngine(store).process_checkout([CartItem("p1", 1)], "TEN")

    stats = AdminStatsService(store).get_stats()

    assert [(c.code, c.is_used) for c in stats.discount_codes] == [("ten", True)]
