# app/crud/product.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from typing import Dict, Iterable, List, Optional
import uuid

from app.models.product import Product


async def get_product(product_id: uuid.UUID, db: AsyncSession) -> Optional[Product]:
    result = await db.execute(select(Product).where(Product.id == product_id))
    return result.scalar_one_or_none()


async def get_products_by_ids(product_ids: Iterable[uuid.UUID], db: AsyncSession) -> Dict[uuid.UUID, Product]:
    ids = set(product_ids)
    if not ids:
        return {}
    result = await db.execute(select(Product).where(Product.id.in_(ids)))
    return {product.id: product for product in result.scalars().all()}


async def count_products(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Product.id)))
    return int(result.scalar_one())


async def bulk_create_products(products: Iterable[dict], db: AsyncSession) -> List[Product]:
    new_instances = [Product(**data) for data in products]
    if not new_instances:
        return []
    db.add_all(new_instances)
    await db.commit()
    return new_instances
