from collections import Counter
from threading import Lock
from typing import Dict, Counter as CounterType

_metrics: CounterType[str] = Counter()
_lock = Lock()


def _inc(key: str) -> None:
    with _lock:
        _metrics[key] += 1


def record_checkout() -> None:
    _inc("checkouts")


def record_checkout_rejected() -> None:
    _inc("checkouts_rejected")


def record_coupon_redeemed() -> None:
    _inc("coupons_redeemed")


def record_reward_issued() -> None:
    _inc("rewards_issued")


def snapshot() -> Dict[str, int]:
    with _lock:
        return dict(_metrics)


def reset() -> None:
    with _lock:
        _metrics.clear()
