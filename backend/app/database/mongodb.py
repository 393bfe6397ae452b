"""MongoDB database connection and operations."""

import logging
import re
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import ConnectionFailure

from app.config import get_settings
from app.models.cart import CartItemInDB
from app.models.order import OrderInDB, OrderItemInDB
from app.models.product import ProductBase, ProductImage, ProductVariant
from app.models.user import SessionInDB, UserInDB
from app.models.wishlist import WishlistItemInDB

logger = logging.getLogger(__name__)
settings = get_settings()

PRODUCTS = "products"
PRODUCT_VARIANTS = "product_variants"
PRODUCT_IMAGES = "product_images"
CART_ITEMS = "cart_items"
ORDERS = "orders"
ORDER_ITEMS = "order_items"
WISHLIST = "wishlist"
USERS = "users"
SESSIONS = "sessions"

# Documents are keyed by their own string id; Mongo's _id never leaves this module
_NO_OBJECT_ID = {"_id": 0}


class MongoDB:
    """MongoDB connection manager and storefront collection access."""

    def __init__(self) -> None:
        """Initialize MongoDB connection."""
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Connect to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(
                settings.mongodb_url,
                maxPoolSize=settings.mongodb_max_pool_size,
                minPoolSize=settings.mongodb_min_pool_size,
                tz_aware=True,
            )
            self.db = self.client[settings.mongodb_database]

            # Test connection
            await self.client.admin.command("ping")
            logger.info("Connected to MongoDB: %s", settings.mongodb_database)

            await self.create_indexes()

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB: %s", e)
            raise

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")
        self.client = None
        self.db = None

    def _collection(self, name: str) -> AsyncIOMotorCollection:
        if self.db is None:
            raise ConnectionError("Database not connected")
        return self.db[name]

    async def create_indexes(self) -> None:
        """Create database indexes."""
        for name in (PRODUCTS, PRODUCT_VARIANTS, PRODUCT_IMAGES, CART_ITEMS, ORDERS,
                     ORDER_ITEMS, WISHLIST, USERS):
            await self._collection(name).create_index("id", unique=True, name="id_unique")

        await self._collection(PRODUCTS).create_index(
            [("status", ASCENDING), ("created_at", DESCENDING)], name="status_created_at"
        )
        await self._collection(PRODUCT_VARIANTS).create_index("product_id", name="product_id_index")
        await self._collection(PRODUCT_IMAGES).create_index("product_id", name="product_id_index")
        await self._collection(CART_ITEMS).create_index("user_id", name="user_id_index")
        await self._collection(ORDERS).create_index(
            "order_number", unique=True, name="order_number_unique"
        )
        await self._collection(ORDERS).create_index(
            [("user_id", ASCENDING), ("created_at", DESCENDING)], name="user_created_at"
        )
        await self._collection(ORDER_ITEMS).create_index("order_id", name="order_id_index")
        await self._collection(WISHLIST).create_index(
            [("user_id", ASCENDING), ("product_id", ASCENDING)],
            unique=True,
            name="user_product_unique",
        )
        await self._collection(USERS).create_index("email", unique=True, name="email_unique")
        await self._collection(SESSIONS).create_index("token", unique=True, name="token_unique")
        logger.info("MongoDB indexes created")

    # Products

    async def insert_product(
        self,
        product: ProductBase,
        variants: Optional[list[ProductVariant]] = None,
        images: Optional[list[ProductImage]] = None,
    ) -> None:
        """Insert a product along with its variants and images."""
        await self._collection(PRODUCTS).insert_one(
            product.model_dump(include=set(ProductBase.model_fields))
        )
        if variants:
            await self._collection(PRODUCT_VARIANTS).insert_many(
                [v.model_dump() for v in variants]
            )
        if images:
            await self._collection(PRODUCT_IMAGES).insert_many([i.model_dump() for i in images])

    async def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[dict[str, Any]]:
        """List active products, newest first."""
        query: dict[str, Any] = {"status": "active"}
        if category:
            query["category"] = category
        if search:
            query["name"] = {"$regex": re.escape(search), "$options": "i"}

        cursor = (
            self._collection(PRODUCTS)
            .find(query, _NO_OBJECT_ID)
            .sort("created_at", DESCENDING)
            .skip(skip)
            .limit(limit)
        )
        return await cursor.to_list(length=limit)

    async def list_categories(self) -> list[str]:
        """Distinct categories across active products."""
        categories = await self._collection(PRODUCTS).distinct("category", {"status": "active"})
        return sorted(c for c in categories if c)

    async def get_product(self, product_id: str, active_only: bool = True) -> Optional[dict[str, Any]]:
        """Get a product by ID."""
        query: dict[str, Any] = {"id": product_id}
        if active_only:
            query["status"] = "active"
        return await self._collection(PRODUCTS).find_one(query, _NO_OBJECT_ID)

    async def get_products_by_ids(self, product_ids: list[str]) -> dict[str, dict[str, Any]]:
        """Fetch products keyed by ID, regardless of status."""
        if not product_ids:
            return {}
        cursor = self._collection(PRODUCTS).find({"id": {"$in": product_ids}}, _NO_OBJECT_ID)
        return {doc["id"]: doc for doc in await cursor.to_list(length=None)}

    async def get_variants(self, product_ids: list[str]) -> list[dict[str, Any]]:
        """Variants for the given products."""
        if not product_ids:
            return []
        cursor = self._collection(PRODUCT_VARIANTS).find(
            {"product_id": {"$in": product_ids}}, _NO_OBJECT_ID
        )
        return await cursor.to_list(length=None)

    async def get_variants_by_ids(self, variant_ids: list[str]) -> dict[str, dict[str, Any]]:
        if not variant_ids:
            return {}
        cursor = self._collection(PRODUCT_VARIANTS).find({"id": {"$in": variant_ids}}, _NO_OBJECT_ID)
        return {doc["id"]: doc for doc in await cursor.to_list(length=None)}

    async def get_images(self, product_ids: list[str]) -> list[dict[str, Any]]:
        """Images for the given products."""
        if not product_ids:
            return []
        cursor = self._collection(PRODUCT_IMAGES).find(
            {"product_id": {"$in": product_ids}}, _NO_OBJECT_ID
        )
        return await cursor.to_list(length=None)

    # Cart

    async def get_cart_items(self, user_id: str) -> list[dict[str, Any]]:
        """All cart items owned by a user, oldest first."""
        cursor = (
            self._collection(CART_ITEMS)
            .find({"user_id": user_id}, _NO_OBJECT_ID)
            .sort("created_at", ASCENDING)
        )
        return await cursor.to_list(length=None)

    async def get_cart_item(self, user_id: str, item_id: str) -> Optional[dict[str, Any]]:
        return await self._collection(CART_ITEMS).find_one(
            {"id": item_id, "user_id": user_id}, _NO_OBJECT_ID
        )

    async def find_cart_item(
        self, user_id: str, product_id: str, variant_id: Optional[str]
    ) -> Optional[dict[str, Any]]:
        """Existing cart line for the same product and variant."""
        return await self._collection(CART_ITEMS).find_one(
            {"user_id": user_id, "product_id": product_id, "variant_id": variant_id},
            _NO_OBJECT_ID,
        )

    async def insert_cart_item(self, item: CartItemInDB) -> None:
        await self._collection(CART_ITEMS).insert_one(item.model_dump())

    async def update_cart_item_quantity(self, user_id: str, item_id: str, quantity: int) -> bool:
        """Set a cart item's quantity. Returns False if the item was not found."""
        result = await self._collection(CART_ITEMS).update_one(
            {"id": item_id, "user_id": user_id}, {"$set": {"quantity": quantity}}
        )
        return result.matched_count > 0

    async def delete_cart_item(self, user_id: str, item_id: str) -> bool:
        result = await self._collection(CART_ITEMS).delete_one({"id": item_id, "user_id": user_id})
        return result.deleted_count > 0

    async def delete_cart_items(self, user_id: str, item_ids: Optional[list[str]] = None) -> int:
        """Delete a user's cart items, or only those in item_ids when given."""
        query: dict[str, Any] = {"user_id": user_id}
        if item_ids is not None:
            query["id"] = {"$in": item_ids}
        result = await self._collection(CART_ITEMS).delete_many(query)
        return result.deleted_count

    # Orders

    async def insert_order(self, order: OrderInDB) -> None:
        """Insert an order header. Raises DuplicateKeyError on a reused order number."""
        await self._collection(ORDERS).insert_one(order.model_dump())

    async def insert_order_items(self, items: list[OrderItemInDB]) -> None:
        if items:
            await self._collection(ORDER_ITEMS).insert_many([i.model_dump() for i in items])

    async def delete_order(self, order_id: str) -> None:
        """Remove an order header and any of its line items."""
        await self._collection(ORDER_ITEMS).delete_many({"order_id": order_id})
        await self._collection(ORDERS).delete_one({"id": order_id})

    async def list_orders(self, user_id: str) -> list[dict[str, Any]]:
        """A user's orders, newest first."""
        cursor = (
            self._collection(ORDERS)
            .find({"user_id": user_id}, _NO_OBJECT_ID)
            .sort("created_at", DESCENDING)
        )
        return await cursor.to_list(length=None)

    async def get_order(self, user_id: str, order_id: str) -> Optional[dict[str, Any]]:
        return await self._collection(ORDERS).find_one(
            {"id": order_id, "user_id": user_id}, _NO_OBJECT_ID
        )

    async def get_order_items(self, order_ids: list[str]) -> list[dict[str, Any]]:
        if not order_ids:
            return []
        cursor = self._collection(ORDER_ITEMS).find(
            {"order_id": {"$in": order_ids}}, _NO_OBJECT_ID
        )
        return await cursor.to_list(length=None)

    # Wishlist

    async def list_wishlist_items(self, user_id: str) -> list[dict[str, Any]]:
        cursor = (
            self._collection(WISHLIST)
            .find({"user_id": user_id}, _NO_OBJECT_ID)
            .sort("created_at", DESCENDING)
        )
        return await cursor.to_list(length=None)

    async def get_wishlist_item(self, user_id: str, item_id: str) -> Optional[dict[str, Any]]:
        return await self._collection(WISHLIST).find_one(
            {"id": item_id, "user_id": user_id}, _NO_OBJECT_ID
        )

    async def insert_wishlist_item(self, item: WishlistItemInDB) -> None:
        """Insert a wishlist entry. Raises DuplicateKeyError if already present."""
        await self._collection(WISHLIST).insert_one(item.model_dump())

    async def delete_wishlist_item(self, user_id: str, item_id: str) -> bool:
        result = await self._collection(WISHLIST).delete_one({"id": item_id, "user_id": user_id})
        return result.deleted_count > 0

    # Users and sessions

    async def insert_user(self, user: UserInDB) -> None:
        """Insert a user. Raises DuplicateKeyError if the email is taken."""
        await self._collection(USERS).insert_one(user.model_dump())

    async def get_user(self, user_id: str) -> Optional[UserInDB]:
        """Get user by ID."""
        user_data = await self._collection(USERS).find_one({"id": user_id}, _NO_OBJECT_ID)
        if user_data:
            return UserInDB(**user_data)
        return None

    async def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        """Get user by email."""
        user_data = await self._collection(USERS).find_one({"email": email}, _NO_OBJECT_ID)
        if user_data:
            return UserInDB(**user_data)
        return None

    async def insert_session(self, session: SessionInDB) -> None:
        await self._collection(SESSIONS).insert_one(session.model_dump())

    async def get_session(self, token: str) -> Optional[SessionInDB]:
        session_data = await self._collection(SESSIONS).find_one({"token": token}, _NO_OBJECT_ID)
        if session_data:
            return SessionInDB(**session_data)
        return None

    async def delete_session(self, token: str) -> bool:
        result = await self._collection(SESSIONS).delete_one({"token": token})
        return result.deleted_count > 0


# Global MongoDB instance
mongodb = MongoDB()
