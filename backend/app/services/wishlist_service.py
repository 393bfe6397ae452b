"""Wishlist service."""

import logging
from collections import defaultdict
from typing import Any

from pymongo.errors import DuplicateKeyError

from app.database.mongodb import mongodb
from app.errors import AlreadyInWishlistError, ProductNotFoundError, WishlistItemNotFoundError
from app.models.cart import CartResponse
from app.models.product import discount_percentage
from app.models.wishlist import WishlistEntry, WishlistItemInDB
from app.services.cart_service import CartService
from app.services.catalog_service import first_image_url

logger = logging.getLogger(__name__)


class WishlistService:
    """Wishlist service for saving products for later."""

    @staticmethod
    async def list_items(user_id: str) -> list[WishlistEntry]:
        """Wishlist entries joined to their products, newest first."""
        items = await mongodb.list_wishlist_items(user_id)
        product_ids = [i["product_id"] for i in items]
        products = await mongodb.get_products_by_ids(product_ids)
        images_by_product: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for image in await mongodb.get_images(product_ids):
            images_by_product[image["product_id"]].append(image)

        entries = []
        for item in items:
            product = products.get(item["product_id"])
            if product is None:
                continue
            entries.append(
                WishlistEntry(
                    id=item["id"],
                    product_id=product["id"],
                    name=product["name"],
                    slug=product["slug"],
                    price=product["price"],
                    compare_at_price=product.get("compare_at_price"),
                    discount_percentage=discount_percentage(
                        product["price"], product.get("compare_at_price")
                    ),
                    in_stock=product.get("quantity", 0) > 0,
                    image_url=first_image_url(images_by_product[product["id"]]),
                    created_at=item["created_at"],
                )
            )
        return entries

    @staticmethod
    async def add_item(user_id: str, product_id: str) -> WishlistItemInDB:
        """Save a product to the wishlist.

        Raises:
            ProductNotFoundError: if the product is missing or not active
            AlreadyInWishlistError: if the product is already saved
        """
        if not await mongodb.get_product(product_id):
            raise ProductNotFoundError(product_id)

        item = WishlistItemInDB(user_id=user_id, product_id=product_id)
        try:
            await mongodb.insert_wishlist_item(item)
        except DuplicateKeyError:
            raise AlreadyInWishlistError(product_id)
        logger.info("Added product %s to wishlist for user %s", product_id, user_id)
        return item

    @staticmethod
    async def remove_item(user_id: str, item_id: str) -> None:
        if not await mongodb.delete_wishlist_item(user_id, item_id):
            raise WishlistItemNotFoundError(item_id)
        logger.info("Removed wishlist item %s for user %s", item_id, user_id)

    @staticmethod
    async def move_to_cart(user_id: str, item_id: str) -> CartResponse:
        """Add the saved product to the cart with quantity 1 and drop it from the wishlist."""
        item = await mongodb.get_wishlist_item(user_id, item_id)
        if not item:
            raise WishlistItemNotFoundError(item_id)

        cart = await CartService.add_item(user_id, item["product_id"], quantity=1)
        await mongodb.delete_wishlist_item(user_id, item_id)
        return cart


# Global wishlist service instance
wishlist_service = WishlistService()
