"""Wishlist data models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.utils.helpers import generate_uuid, utcnow


class WishlistItemInDB(BaseModel):
    """Wishlist entry as stored in the wishlist collection."""

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    product_id: str
    created_at: datetime = Field(default_factory=utcnow)


class WishlistItemCreate(BaseModel):
    product_id: str


class WishlistEntry(BaseModel):
    """Wishlist entry joined to its product."""

    id: str
    product_id: str
    name: str
    slug: str
    price: float
    compare_at_price: Optional[float] = None
    discount_percentage: Optional[int] = None
    in_stock: bool
    image_url: Optional[str] = None
    created_at: datetime
