from __future__ import annotations


class ShopError(Exception):
    """Base class for domain failures the caller can recover from."""

    code = "shop_error"


class ProductNotFound(ShopError):
    code = "product_not_found"

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class InvalidOrUsedCoupon(ShopError):
    code = "invalid_coupon"

    def __init__(self, code: str) -> None:
        self.coupon_code = code
        super().__init__("Invalid or already used discount code")


class EmptyCart(ShopError):
    code = "empty_cart"

    def __init__(self) -> None:
        super().__init__("At least one item is required in the cart")


class InvalidConfiguration(ShopError, ValueError):
    code = "invalid_configuration"
