from lootshop.models.catalog import Product  # noqa: F401
from lootshop.models.cart import CartItem  # noqa: F401
from lootshop.models.order import Order  # noqa: F401
from lootshop.models.coupon import Coupon, CouponTier  # noqa: F401

__all__ = [
    "Product",
    "CartItem",
    "Order",
    "Coupon",
    "CouponTier",
]
