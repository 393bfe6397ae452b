"""Cart data models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.utils.helpers import generate_uuid, utcnow

MAX_LINE_QUANTITY = 99


class CartItemInDB(BaseModel):
    """Cart item as stored in the cart_items collection."""

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    product_id: str
    variant_id: Optional[str] = None
    quantity: int = Field(..., ge=1, le=MAX_LINE_QUANTITY)
    created_at: datetime = Field(default_factory=utcnow)


class CartProduct(BaseModel):
    """Product fields joined onto a cart line."""

    id: str
    name: str
    price: float
    image_url: Optional[str] = None


class CartVariant(BaseModel):
    """Variant fields joined onto a cart line."""

    id: str
    name: str
    price: Optional[float] = None


class CartLine(BaseModel):
    """Cart item joined to its product and optional variant."""

    id: str
    product_id: str
    variant_id: Optional[str] = None
    quantity: int
    product: CartProduct
    variant: Optional[CartVariant] = None
    unit_price: float
    line_total: float


class CartItemCreate(BaseModel):
    """Add-to-cart request."""

    product_id: str
    variant_id: Optional[str] = None
    quantity: int = Field(1, ge=1, le=MAX_LINE_QUANTITY)


class CartItemUpdate(BaseModel):
    """Quantity change request; zero removes the item."""

    quantity: int = Field(..., ge=0, le=MAX_LINE_QUANTITY)


class PricingSummary(BaseModel):
    """Money totals for a cart or order."""

    subtotal: float
    tax_amount: float
    shipping_amount: float
    total_amount: float
    currency: str = "USD"


class CartResponse(BaseModel):
    """Cart contents with totals."""

    items: list[CartLine] = Field(default_factory=list)
    item_count: int = 0
    summary: PricingSummary
