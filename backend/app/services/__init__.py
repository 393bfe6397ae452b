"""Services package."""

from app.services.auth_service import AuthService, auth_service
from app.services.cart_service import CartService, cart_service
from app.services.catalog_service import CatalogService, catalog_service
from app.services.checkout_service import CheckoutService, checkout_service
from app.services.order_service import OrderService, order_service
from app.services.wishlist_service import WishlistService, wishlist_service

__all__ = [
    "AuthService",
    "auth_service",
    "CartService",
    "cart_service",
    "CatalogService",
    "catalog_service",
    "CheckoutService",
    "checkout_service",
    "OrderService",
    "order_service",
    "WishlistService",
    "wishlist_service",
]
