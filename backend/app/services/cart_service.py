"""Cart service for business logic."""

import logging
from collections import defaultdict
from typing import Any, Optional

from app.database.mongodb import mongodb
from app.errors import CartItemNotFoundError, ProductNotFoundError, VariantNotFoundError
from app.models.cart import (
    MAX_LINE_QUANTITY,
    CartItemInDB,
    CartLine,
    CartProduct,
    CartResponse,
    CartVariant,
)
from app.services.catalog_service import first_image_url
from app.services.pricing import calculate_totals, effective_unit_price, line_total

logger = logging.getLogger(__name__)


class CartService:
    """Cart service for handling cart-related operations."""

    @staticmethod
    async def get_cart_lines(user_id: str) -> list[CartLine]:
        """Load the user's cart items joined to product and variant.

        Items whose product has been deleted are dropped from the cart.
        """
        items = await mongodb.get_cart_items(user_id)
        if not items:
            return []

        product_ids = list({i["product_id"] for i in items})
        products = await mongodb.get_products_by_ids(product_ids)
        variants = await mongodb.get_variants_by_ids(
            list({i["variant_id"] for i in items if i.get("variant_id")})
        )
        images_by_product: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for image in await mongodb.get_images(product_ids):
            images_by_product[image["product_id"]].append(image)

        lines = []
        orphaned = []
        for item in items:
            product = products.get(item["product_id"])
            if product is None:
                logger.warning(
                    "Removing cart item %s: product %s no longer exists",
                    item["id"],
                    item["product_id"],
                )
                orphaned.append(item["id"])
                continue

            variant = variants.get(item["variant_id"]) if item.get("variant_id") else None
            unit_price = effective_unit_price(
                product["price"], variant.get("price") if variant else None
            )
            lines.append(
                CartLine(
                    id=item["id"],
                    product_id=item["product_id"],
                    variant_id=item.get("variant_id"),
                    quantity=item["quantity"],
                    product=CartProduct(
                        id=product["id"],
                        name=product["name"],
                        price=product["price"],
                        image_url=first_image_url(images_by_product[product["id"]]),
                    ),
                    variant=CartVariant(
                        id=variant["id"], name=variant["name"], price=variant.get("price")
                    ) if variant else None,
                    unit_price=unit_price,
                    line_total=line_total(unit_price, item["quantity"]),
                )
            )

        if orphaned:
            await mongodb.delete_cart_items(user_id, item_ids=orphaned)
        return lines

    @staticmethod
    async def get_cart(user_id: str) -> CartResponse:
        """Cart contents with pricing summary."""
        lines = await CartService.get_cart_lines(user_id)
        return CartResponse(
            items=lines,
            item_count=sum(line.quantity for line in lines),
            summary=calculate_totals((line.unit_price, line.quantity) for line in lines),
        )

    @staticmethod
    async def add_item(
        user_id: str, product_id: str, variant_id: Optional[str] = None, quantity: int = 1
    ) -> CartResponse:
        """Add a product to the cart, merging with an existing line for the same variant.

        A line never holds more than MAX_LINE_QUANTITY units; larger merges are capped.
        """
        product = await mongodb.get_product(product_id)
        if not product:
            raise ProductNotFoundError(product_id)

        if variant_id:
            variant = (await mongodb.get_variants_by_ids([variant_id])).get(variant_id)
            if not variant or variant["product_id"] != product_id:
                raise VariantNotFoundError(product_id, variant_id)

        existing = await mongodb.find_cart_item(user_id, product_id, variant_id)
        if existing:
            new_quantity = min(existing["quantity"] + quantity, MAX_LINE_QUANTITY)
            await mongodb.update_cart_item_quantity(user_id, existing["id"], new_quantity)
            logger.info("Cart item %s quantity now %d for user %s", existing["id"], new_quantity, user_id)
        else:
            item = CartItemInDB(
                user_id=user_id,
                product_id=product_id,
                variant_id=variant_id,
                quantity=min(quantity, MAX_LINE_QUANTITY),
            )
            await mongodb.insert_cart_item(item)
            logger.info("Added product %s to cart for user %s", product_id, user_id)

        return await CartService.get_cart(user_id)

    @staticmethod
    async def update_quantity(user_id: str, item_id: str, quantity: int) -> CartResponse:
        """Set a line's quantity; zero removes the line."""
        if quantity == 0:
            return await CartService.remove_item(user_id, item_id)

        if not await mongodb.update_cart_item_quantity(user_id, item_id, quantity):
            raise CartItemNotFoundError(item_id)
        return await CartService.get_cart(user_id)

    @staticmethod
    async def remove_item(user_id: str, item_id: str) -> CartResponse:
        if not await mongodb.delete_cart_item(user_id, item_id):
            raise CartItemNotFoundError(item_id)
        logger.info("Removed cart item %s for user %s", item_id, user_id)
        return await CartService.get_cart(user_id)

    @staticmethod
    async def clear(user_id: str) -> int:
        """Delete every item in the user's cart."""
        deleted = await mongodb.delete_cart_items(user_id)
        logger.info("Cleared %d cart items for user %s", deleted, user_id)
        return deleted


# Global cart service instance
cart_service = CartService()
