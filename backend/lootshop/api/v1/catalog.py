from fastapi import APIRouter, Depends

from lootshop.core.dependencies import get_store
from lootshop.db.store import InMemoryStore
from lootshop.schemas.catalog import ProductList, ProductRead

router = APIRouter(prefix="/products", tags=["catalog"])


@router.get("", response_model=ProductList)
def list_products(store: InMemoryStore = Depends(get_store)):
    return ProductList(products=[ProductRead.model_validate(product) for product in store.products.all()])
