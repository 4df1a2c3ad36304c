import enum
from dataclasses import dataclass


class CouponTier(str, enum.Enum):
    COMMON = "COMMON"
    RARE = "RARE"
    LEGENDARY = "LEGENDARY"


@dataclass
class Coupon:
    code: str
    discount_percent: int
    tier: CouponTier
    is_used: bool = False
