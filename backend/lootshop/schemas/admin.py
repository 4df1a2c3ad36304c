from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from lootshop.models.coupon import CouponTier
from lootshop.schemas.checkout import RewardCouponRead


class DiscountCodeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    discount_percent: int
    tier: CouponTier
    is_used: bool


class AdminStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_items_purchased: int
    total_purchase_amount: Decimal
    total_discount_amount: Decimal
    discount_codes: list[DiscountCodeRead] = []


class GenerateCouponResponse(BaseModel):
    success: bool
    message: str
    coupon: RewardCouponRead | None = None
