"""Data models package."""

from app.models.cart import (
    CartItemCreate,
    CartItemInDB,
    CartItemUpdate,
    CartLine,
    CartProduct,
    CartResponse,
    CartVariant,
    PricingSummary,
)
from app.models.order import (
    Address,
    CheckoutRequest,
    OrderDetail,
    OrderInDB,
    OrderItemInDB,
    OrderSummary,
)
from app.models.product import Product, ProductBase, ProductImage, ProductVariant
from app.models.request import ErrorResponse, HealthResponse, MessageResponse
from app.models.user import (
    SessionInDB,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UserInDB,
    UserResponse,
)
from app.models.wishlist import WishlistEntry, WishlistItemCreate, WishlistItemInDB

__all__ = [
    # Product models
    "Product",
    "ProductBase",
    "ProductImage",
    "ProductVariant",
    # Cart models
    "CartItemInDB",
    "CartItemCreate",
    "CartItemUpdate",
    "CartLine",
    "CartProduct",
    "CartVariant",
    "CartResponse",
    "PricingSummary",
    # Order models
    "Address",
    "CheckoutRequest",
    "OrderInDB",
    "OrderItemInDB",
    "OrderDetail",
    "OrderSummary",
    # Wishlist models
    "WishlistItemInDB",
    "WishlistItemCreate",
    "WishlistEntry",
    # User models
    "SignUpRequest",
    "SignInRequest",
    "UserInDB",
    "UserResponse",
    "SessionInDB",
    "SessionResponse",
    # Request/Response models
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]
