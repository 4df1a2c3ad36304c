from fastapi import APIRouter, Depends, HTTPException, status

from lootshop.core.dependencies import get_store
from lootshop.db.store import InMemoryStore
from lootshop.schemas.cart import CartCleared, CartItemCreate, CartRead
from lootshop.services import cart as cart_service
from lootshop.services.errors import ProductNotFound

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartRead)
def get_cart(store: InMemoryStore = Depends(get_store)):
    return CartRead.model_validate(cart_service.get_cart(store))


@router.post("/items", response_model=CartRead)
def add_item(payload: CartItemCreate, store: InMemoryStore = Depends(get_store)):
    try:
        summary = cart_service.add_item(store, payload.product_id, payload.quantity)
    except ProductNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return CartRead.model_validate(summary)


@router.delete("", response_model=CartCleared)
def clear_cart(store: InMemoryStore = Depends(get_store)):
    cart_service.clear_cart(store)
    return CartCleared()
