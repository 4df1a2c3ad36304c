from dataclasses import dataclass


@dataclass(frozen=True)
class CartItem:
    product_id: str
    quantity: int
