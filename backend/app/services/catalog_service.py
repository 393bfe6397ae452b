"""Product catalogue service."""

import logging
from collections import defaultdict
from typing import Any, Optional

from app.database.mongodb import mongodb
from app.errors import ProductNotFoundError
from app.models.product import Product, ProductImage, ProductVariant

logger = logging.getLogger(__name__)


def _sorted_images(images: list[dict[str, Any]]) -> list[ProductImage]:
    return sorted((ProductImage(**i) for i in images), key=lambda i: i.position or 0)


def first_image_url(images: list[dict[str, Any]]) -> Optional[str]:
    """URL of the lowest-positioned image, if any."""
    if not images:
        return None
    return min(images, key=lambda i: i.get("position") or 0)["image_url"]


class CatalogService:
    """Read-only access to active products."""

    @staticmethod
    async def list_products(
        category: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        """List active products, newest first, with their images."""
        docs = await mongodb.list_products(category=category, search=search, skip=skip, limit=limit)
        images_by_product: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for image in await mongodb.get_images([d["id"] for d in docs]):
            images_by_product[image["product_id"]].append(image)

        return [
            Product(**doc, images=_sorted_images(images_by_product[doc["id"]]))
            for doc in docs
        ]

    @staticmethod
    async def list_categories() -> list[str]:
        return await mongodb.list_categories()

    @staticmethod
    async def get_product(product_id: str) -> Product:
        """Get an active product with images and variants.

        Raises:
            ProductNotFoundError: if the product is missing or not active
        """
        doc = await mongodb.get_product(product_id)
        if not doc:
            raise ProductNotFoundError(product_id)

        images = await mongodb.get_images([product_id])
        variants = await mongodb.get_variants([product_id])
        return Product(
            **doc,
            images=_sorted_images(images),
            variants=[ProductVariant(**v) for v in variants],
        )


# Global catalog service instance
catalog_service = CatalogService()
