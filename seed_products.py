#!/usr/bin/env python3
"""
Seed the product catalog that savings goals point at.
Usage: python seed_products.py

Does nothing when the products table already has rows. Prices are in paise.
"""

import asyncio
import platform
import sys

from app.core.database import AsyncSessionLocal, engine
from app.crud.product import bulk_create_products, count_products
from app.utils.money import format_amount

STARTER_PRODUCTS = [
    {
        "name": "iPhone 15 Pro",
        "category": "Electronics",
        "price": 9_990_000,
        "image_url": "https://images.unsplash.com/photo-1695048133142-1a20484d2569?w=500",
        "description": "A17 Pro chip, titanium design and a pro camera system",
        "available": True,
    },
    {
        "name": "AirPods Pro (2nd generation)",
        "category": "Electronics",
        "price": 2_490_000,
        "image_url": "https://images.unsplash.com/photo-1606841837239-c5a1a4a07af7?w=500",
        "description": "Active noise cancellation and adaptive transparency",
        "available": True,
    },
    {
        "name": "Nike Air Jordan 1",
        "category": "Footwear",
        "price": 1_700_000,
        "image_url": "https://images.unsplash.com/photo-1556906781-9a412961c28c?w=500",
        "description": "Basketball sneakers in premium leather",
        "available": True,
    },
    {
        "name": "MacBook Pro 14\"",
        "category": "Electronics",
        "price": 19_990_000,
        "image_url": "https://images.unsplash.com/photo-1517336714731-489689fd1ca8?w=500",
        "description": "M3 Pro chip and a Liquid Retina XDR display",
        "available": True,
    },
    {
        "name": "Sony WH-1000XM5",
        "category": "Electronics",
        "price": 3_990_000,
        "image_url": "https://images.unsplash.com/photo-1618366712010-f4ae9c647dcb?w=500",
        "description": "Noise cancelling wireless headphones",
        "available": True,
    },
    {
        "name": "Apple Watch Series 9",
        "category": "Electronics",
        "price": 4_290_000,
        "image_url": "https://images.unsplash.com/photo-1579586337278-3befd40fd17a?w=500",
        "description": "Health and fitness tracking with an always-on display",
        "available": True,
    },
]

async def seed_products():
    print("🌱 Seeding product catalog...")

    try:
        async with AsyncSessionLocal() as session:
            existing = await count_products(session)
            if existing:
                print(f"⚠️  Catalog already has {existing} products, nothing to do")
                return

            created = await bulk_create_products(STARTER_PRODUCTS, session)
            for product in created:
                print(f"   ✅ {product.name} ({product.category}) {format_amount(product.price)}")
            print(f"\n🎉 Inserted {len(created)} products")
    finally:
        await engine.dispose()

def main():
    if platform.system() == 'Windows':
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

    try:
        asyncio.run(seed_products())
    except Exception as e:
        print(f"❌ Seeding failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
