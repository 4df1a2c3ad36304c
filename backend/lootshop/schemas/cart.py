from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CartItemCreate(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)


class CartItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    quantity: int


class CartRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[CartItemRead] = []
    subtotal: Decimal


class CartCleared(BaseModel):
    success: bool = True
    message: str = "Cart cleared successfully"
