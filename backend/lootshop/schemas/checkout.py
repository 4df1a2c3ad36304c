from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from lootshop.models.coupon import CouponTier
from lootshop.schemas.cart import CartItemCreate, CartItemRead

TIER_MESSAGES: dict[CouponTier, str] = {
    CouponTier.COMMON: "Standard Reward Unlocked!",
    CouponTier.RARE: "System Overclock Activated!",
    CouponTier.LEGENDARY: "Critical Success Achieved!",
}


class CheckoutRequest(BaseModel):
    items: list[CartItemCreate] = Field(min_length=1)
    discount_code: str | None = Field(default=None, max_length=40)


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    items: list[CartItemRead]
    total_amount: Decimal
    discount_applied: Decimal
    final_amount: Decimal
    timestamp: datetime


class RewardCouponRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    discount_percent: int
    tier: CouponTier


class RewardRead(RewardCouponRead):
    message: str


class CheckoutResponse(BaseModel):
    success: bool = True
    order: OrderRead
    reward: RewardRead | None = None
