from fastapi import APIRouter, Depends, status

from lootshop.core.dependencies import get_checkout_engine
from lootshop.models import CartItem
from lootshop.schemas.checkout import (
    TIER_MESSAGES,
    CheckoutRequest,
    CheckoutResponse,
    OrderRead,
    RewardRead,
)
from lootshop.services.checkout import CheckoutEngine

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
def checkout(payload: CheckoutRequest, engine: CheckoutEngine = Depends(get_checkout_engine)):
    items = [CartItem(product_id=item.product_id, quantity=item.quantity) for item in payload.items]
    result = engine.process_checkout(items, payload.discount_code)

    reward = None
    if result.reward_coupon:
        coupon = result.reward_coupon
        reward = RewardRead(
            code=coupon.code,
            discount_percent=coupon.discount_percent,
            tier=coupon.tier,
            message=TIER_MESSAGES.get(coupon.tier, "Reward Unlocked!"),
        )
    return CheckoutResponse(order=OrderRead.model_validate(result.order), reward=reward)
