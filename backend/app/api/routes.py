"""API routes for the storefront."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_bearer_token, get_current_user
from app.config import get_settings
from app.database.mongodb import mongodb
from app.models.cart import CartItemCreate, CartItemUpdate, CartResponse
from app.models.order import CheckoutRequest, OrderDetail, OrderSummary
from app.models.product import Product
from app.models.request import HealthResponse, MessageResponse
from app.models.user import (
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UserInDB,
    UserResponse,
)
from app.models.wishlist import WishlistEntry, WishlistItemCreate, WishlistItemInDB
from app.services.auth_service import auth_service
from app.services.cart_service import cart_service
from app.services.catalog_service import catalog_service
from app.services.checkout_service import checkout_service
from app.services.order_service import order_service
from app.services.wishlist_service import wishlist_service

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix=settings.api_prefix)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    mongodb_status = "connected" if mongodb.db is not None else "disconnected"
    return HealthResponse(
        status="healthy" if mongodb_status == "connected" else "degraded",
        version=settings.app_version,
        services={"mongodb": mongodb_status},
    )


# Auth

@router.post("/auth/sign-up", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(request: SignUpRequest) -> UserResponse:
    """Create an account. Passwords must match and be at least 8 characters."""
    return await auth_service.sign_up(request.email, request.password)


@router.post("/auth/sign-in", response_model=SessionResponse)
async def sign_in(request: SignInRequest) -> SessionResponse:
    return await auth_service.sign_in(request.email, request.password)


@router.post("/auth/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(token: str = Depends(get_bearer_token)) -> Response:
    await auth_service.sign_out(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/auth/me", response_model=UserResponse)
async def current_user(user: UserInDB = Depends(get_current_user)) -> UserResponse:
    return UserResponse(**user.model_dump())


# Catalogue

@router.get("/products", response_model=list[Product])
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = Query(None, max_length=100),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
) -> list[Product]:
    """Active products, newest first."""
    return await catalog_service.list_products(
        category=category, search=search, skip=skip, limit=limit
    )


@router.get("/products/categories", response_model=list[str])
async def list_categories() -> list[str]:
    return await catalog_service.list_categories()


@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str) -> Product:
    return await catalog_service.get_product(product_id)


# Cart

@router.get("/cart", response_model=CartResponse)
async def get_cart(user: UserInDB = Depends(get_current_user)) -> CartResponse:
    return await cart_service.get_cart(user.id)


@router.post("/cart/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
async def add_cart_item(
    request: CartItemCreate, user: UserInDB = Depends(get_current_user)
) -> CartResponse:
    """Add a product (and optional variant) to the cart."""
    return await cart_service.add_item(
        user.id, request.product_id, request.variant_id, request.quantity
    )


@router.patch("/cart/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str, request: CartItemUpdate, user: UserInDB = Depends(get_current_user)
) -> CartResponse:
    """Set a cart item's quantity. A quantity of 0 removes the item."""
    return await cart_service.update_quantity(user.id, item_id, request.quantity)


@router.delete("/cart/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, user: UserInDB = Depends(get_current_user)) -> CartResponse:
    return await cart_service.remove_item(user.id, item_id)


# Checkout

@router.get("/checkout", response_model=CartResponse)
async def checkout_summary(user: UserInDB = Depends(get_current_user)) -> CartResponse:
    """Cart snapshot and totals. Responds 409 with a redirect to the cart when empty."""
    return await checkout_service.get_summary(user.id)


@router.post("/checkout", response_model=OrderDetail, status_code=status.HTTP_201_CREATED)
async def place_order(
    request: CheckoutRequest,
    response: Response,
    user: UserInDB = Depends(get_current_user),
) -> OrderDetail:
    """Place an order for the current cart.

    Body:
        shipping_address: Address to ship to
        billing_same_as_shipping: Copy the shipping address for billing (default true)
        billing_address: Required when billing_same_as_shipping is false
    """
    order = await checkout_service.place_order(user.id, request)
    response.headers["Location"] = f"{settings.api_prefix}/orders/{order.id}"
    return order


# Orders

@router.get("/orders", response_model=list[OrderSummary])
async def list_orders(user: UserInDB = Depends(get_current_user)) -> list[OrderSummary]:
    return await order_service.list_orders(user.id)


@router.get("/orders/{order_id}", response_model=OrderDetail)
async def get_order(order_id: str, user: UserInDB = Depends(get_current_user)) -> OrderDetail:
    return await order_service.get_order(user.id, order_id)


# Wishlist

@router.get("/wishlist", response_model=list[WishlistEntry])
async def list_wishlist(user: UserInDB = Depends(get_current_user)) -> list[WishlistEntry]:
    return await wishlist_service.list_items(user.id)


@router.post("/wishlist", response_model=WishlistItemInDB, status_code=status.HTTP_201_CREATED)
async def add_to_wishlist(
    request: WishlistItemCreate, user: UserInDB = Depends(get_current_user)
) -> WishlistItemInDB:
    return await wishlist_service.add_item(user.id, request.product_id)


@router.delete("/wishlist/{item_id}", response_model=MessageResponse)
async def remove_from_wishlist(
    item_id: str, user: UserInDB = Depends(get_current_user)
) -> MessageResponse:
    await wishlist_service.remove_item(user.id, item_id)
    return MessageResponse(message="Item has been removed from your wishlist.")


@router.post("/wishlist/{item_id}/move-to-cart", response_model=CartResponse)
async def move_wishlist_item_to_cart(
    item_id: str, user: UserInDB = Depends(get_current_user)
) -> CartResponse:
    return await wishlist_service.move_to_cart(user.id, item_id)
