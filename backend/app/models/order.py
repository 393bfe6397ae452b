"""Order data models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.utils.helpers import generate_uuid, utcnow


class Address(BaseModel):
    """Shipping or billing address captured at checkout."""

    full_name: str = Field(..., min_length=1, max_length=200)
    address_line_1: str = Field(..., min_length=1, max_length=300)
    address_line_2: Optional[str] = Field(None, max_length=300)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)

    model_config = {"str_strip_whitespace": True}


class OrderInDB(BaseModel):
    """Order header as stored in the orders collection."""

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    order_number: str
    subtotal: float = Field(..., ge=0)
    tax_amount: float = Field(..., ge=0)
    shipping_amount: float = Field(0.0, ge=0)
    total_amount: float = Field(..., ge=0)
    shipping_address: Address
    billing_address: Address
    status: str = "pending"
    payment_status: str = "pending"
    created_at: datetime = Field(default_factory=utcnow)


class OrderItemInDB(BaseModel):
    """Line item captured from a cart item when the order was placed."""

    id: str = Field(default_factory=generate_uuid)
    order_id: str
    product_id: str
    variant_id: Optional[str] = None
    product_name: str
    variant_name: Optional[str] = None
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0, description="Unit price at time of order")
    total: float = Field(..., ge=0, description="price x quantity")


class OrderDetail(OrderInDB):
    """Order header with its line items."""

    items: list[OrderItemInDB] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "0b6f8e2a-37c4-4d43-8c0f-6f3b1c2d9a11",
                "user_id": "9f3e2d1c-0000-4000-8000-000000000001",
                "order_number": "ORD-1718000000000-K3J9X0PQA",
                "subtotal": 25.0,
                "tax_amount": 2.0,
                "shipping_amount": 0.0,
                "total_amount": 27.0,
                "status": "pending",
                "payment_status": "pending",
                "items": [
                    {
                        "order_id": "0b6f8e2a-37c4-4d43-8c0f-6f3b1c2d9a11",
                        "product_id": "p-1",
                        "product_name": "Classic Tee",
                        "quantity": 2,
                        "price": 10.0,
                        "total": 20.0,
                    }
                ],
            }
        }
    }


class OrderSummary(BaseModel):
    """Row in the order history list."""

    id: str
    order_number: str
    total_amount: float
    status: str
    payment_status: str
    item_count: int
    created_at: datetime


class CheckoutRequest(BaseModel):
    """Place-order request."""

    shipping_address: Address
    billing_same_as_shipping: bool = True
    billing_address: Optional[Address] = None

    @model_validator(mode="after")
    def require_billing_address(self) -> "CheckoutRequest":
        if not self.billing_same_as_shipping and self.billing_address is None:
            raise ValueError("billing_address is required when billing differs from shipping")
        return self

    def resolve_billing_address(self) -> Address:
        """Billing address to persist, copied from shipping when flagged."""
        if self.billing_same_as_shipping:
            return self.shipping_address.model_copy()
        return self.billing_address
