"""Database initialization script.

Creates indexes, seeds a sample catalogue and a demo account.

Usage:
    python -m scripts.init_db
    python -m scripts.init_db --clear
"""

import argparse
import asyncio
import logging

from app.database.mongodb import PRODUCT_IMAGES, PRODUCT_VARIANTS, PRODUCTS, mongodb
from app.errors import EmailAlreadyRegisteredError
from app.models.product import ProductBase, ProductImage, ProductVariant
from app.services.auth_service import auth_service
from app.utils.logger import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo-password"

SAMPLE_PRODUCTS = [
    {
        "name": "Classic Tee",
        "slug": "classic-tee",
        "description": "Soft cotton unisex t-shirt",
        "price": 19.99,
        "compare_at_price": 24.99,
        "quantity": 120,
        "category": "Apparel",
        "image": "https://images.unsplash.com/photo-1520975916090-3105956dac38?w=800",
        "variants": [("Small", None, 40), ("Medium", None, 40), ("Large", 21.99, 40)],
    },
    {
        "name": "Minimal Backpack",
        "slug": "minimal-backpack",
        "description": "Lightweight everyday backpack",
        "price": 49.0,
        "quantity": 35,
        "category": "Bags",
        "image": "https://images.unsplash.com/photo-1519681393784-d120267933ba?w=800",
        "variants": [],
    },
    {
        "name": "Wireless Earbuds",
        "slug": "wireless-earbuds",
        "description": "Noise-isolating Bluetooth earbuds",
        "price": 59.99,
        "compare_at_price": 79.99,
        "quantity": 25,
        "category": "Audio",
        "image": "https://images.unsplash.com/photo-1518448059646-51f7ebf92613?w=800",
        "variants": [("Black", None, 15), ("White", 64.99, 10)],
    },
    {
        "name": "Ceramic Mug",
        "slug": "ceramic-mug",
        "description": "12oz matte finish mug",
        "price": 12.5,
        "quantity": 0,
        "category": "Home",
        "image": "https://images.unsplash.com/photo-1525385133512-2f3bdd039054?w=800",
        "variants": [],
    },
]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create indexes and seed the storefront database")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Drop catalogue collections before seeding",
    )
    return parser.parse_args()


async def seed_products() -> int:
    """Insert the sample catalogue. Returns the number of products inserted."""
    for data in SAMPLE_PRODUCTS:
        product = ProductBase(
            name=data["name"],
            slug=data["slug"],
            description=data["description"],
            price=data["price"],
            compare_at_price=data.get("compare_at_price"),
            quantity=data["quantity"],
            category=data["category"],
        )
        variants = [
            ProductVariant(product_id=product.id, name=name, price=price, quantity=quantity)
            for name, price, quantity in data["variants"]
        ]
        images = [
            ProductImage(
                product_id=product.id, image_url=data["image"], alt_text=data["name"], position=0
            )
        ]
        await mongodb.insert_product(product, variants, images)
        logger.info("Seeded product %s with %d variants", product.name, len(variants))
    return len(SAMPLE_PRODUCTS)


async def init_databases(*, clear: bool = False) -> None:
    """Initialize the database and seed sample data."""
    try:
        logger.info("Initializing database...")
        await mongodb.connect()

        if clear:
            for name in (PRODUCTS, PRODUCT_VARIANTS, PRODUCT_IMAGES):
                await mongodb.db[name].delete_many({})
            logger.info("Cleared catalogue collections")

        if await mongodb.db[PRODUCTS].count_documents({}) == 0:
            count = await seed_products()
            logger.info("Seeded %d products", count)
        else:
            logger.info("Products already exist, skipping catalogue seed")

        try:
            await auth_service.sign_up(DEMO_EMAIL, DEMO_PASSWORD)
            logger.info("Created demo user %s", DEMO_EMAIL)
        except EmailAlreadyRegisteredError:
            logger.info("Demo user %s already exists", DEMO_EMAIL)

        logger.info("Database initialization completed successfully")

    except Exception as e:
        logger.error("Error initializing database: %s", e)
        raise

    finally:
        await mongodb.disconnect()


def main() -> None:
    """Entry point for the script."""
    args = _parse_args()
    asyncio.run(init_databases(clear=args.clear))


if __name__ == "__main__":
    main()
