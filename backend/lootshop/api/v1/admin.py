from fastapi import APIRouter, Depends

from lootshop.core.dependencies import get_admin_stats_service
from lootshop.schemas.admin import AdminStatsRead, GenerateCouponResponse
from lootshop.schemas.checkout import RewardCouponRead
from lootshop.services.admin_stats import AdminStatsService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStatsRead)
def get_stats(service: AdminStatsService = Depends(get_admin_stats_service)):
    return AdminStatsRead.model_validate(service.get_stats())


@router.post("/generate-coupon", response_model=GenerateCouponResponse)
def generate_coupon(service: AdminStatsService = Depends(get_admin_stats_service)):
    check = service.trigger_coupon_check()
    if not check.triggered:
        return GenerateCouponResponse(
            success=False,
            message=(
                f"N-logic condition not met. Need {check.orders_needed} more order(s) before the next reward. "
                f"Current order count: {check.order_count}, N: {check.interval}"
            ),
        )
    return GenerateCouponResponse(
        success=True,
        message=(
            f"Reward coupon generated! This is order #{check.order_count + 1}, "
            f"which is a multiple of N={check.interval}."
        ),
        coupon=RewardCouponRead.model_validate(check.coupon),
    )
