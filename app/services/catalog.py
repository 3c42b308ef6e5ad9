# app/services/catalog.py
from dataclasses import dataclass
from typing import Optional
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import product as product_store
from app.schemas.goal import ProductSummary


@dataclass(frozen=True)
class ProductLookup:
    exists: bool
    available: bool = False
    price: Optional[int] = None
    product: Optional[ProductSummary] = None


class ProductCatalog:
    """Answers "does this product exist, can it be bought, what does it cost"."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def lookup(self, product_id: uuid.UUID) -> ProductLookup:
        product = await product_store.get_product(product_id, self.db)
        if product is None:
            return ProductLookup(exists=False)
        return ProductLookup(
            exists=True,
            available=bool(product.available),
            price=product.price,
            product=ProductSummary.model_validate(product),
        )
