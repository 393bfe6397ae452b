"""Product catalogue data models."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field

from app.utils.helpers import generate_uuid, utcnow


class ProductImage(BaseModel):
    """Image attached to a product."""

    id: str = Field(default_factory=generate_uuid)
    product_id: str
    image_url: str
    alt_text: Optional[str] = None
    position: Optional[int] = Field(None, description="Display order, lowest first")


class ProductVariant(BaseModel):
    """Optional sub-selection of a product (size, colour) with its own price."""

    id: str = Field(default_factory=generate_uuid)
    product_id: str
    name: str = Field(..., min_length=1, max_length=200)
    price: Optional[float] = Field(None, ge=0, description="Overrides the product price when set")
    quantity: int = Field(0, ge=0)
    sku: Optional[str] = None
    options: Optional[dict[str, Any]] = None


class ProductBase(BaseModel):
    """Product fields as stored in the products collection."""

    id: str = Field(default_factory=generate_uuid)
    name: str = Field(..., min_length=1, max_length=500)
    slug: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    price: float = Field(..., ge=0, description="Base price")
    compare_at_price: Optional[float] = Field(None, ge=0, description="Pre-discount price")
    quantity: int = Field(0, ge=0, description="Units on hand")
    category: Optional[str] = None
    status: str = Field("active", description="Only active products are listed")
    created_at: datetime = Field(default_factory=utcnow)


class Product(ProductBase):
    """Product with its images and variants."""

    images: list[ProductImage] = Field(default_factory=list)
    variants: list[ProductVariant] = Field(default_factory=list)

    @computed_field
    @property
    def in_stock(self) -> bool:
        return self.quantity > 0

    @computed_field
    @property
    def discount_percentage(self) -> Optional[int]:
        return discount_percentage(self.price, self.compare_at_price)

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "6f1c1c1e-1b9a-4d7e-9a3f-4b2a0c8d9e10",
                "name": "Wireless Earbuds",
                "slug": "wireless-earbuds",
                "description": "Noise-isolating Bluetooth earbuds",
                "price": 59.99,
                "compare_at_price": 79.99,
                "quantity": 25,
                "category": "Audio",
                "status": "active",
                "images": [],
                "variants": [],
                "in_stock": True,
                "discount_percentage": 25,
            }
        }
    }


def discount_percentage(price: float, compare_at_price: Optional[float]) -> Optional[int]:
    """Whole-number percentage saved against the compare-at price."""
    if not compare_at_price or compare_at_price <= price:
        return None
    return round((compare_at_price - price) / compare_at_price * 100)
