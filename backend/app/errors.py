"""Custom exceptions for the storefront."""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(StorefrontError):
    """Raised when a requested record does not exist for the caller."""

    status_code = 404


class ProductNotFoundError(NotFoundError):
    """Raised when a product ID doesn't exist or is not active."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class VariantNotFoundError(NotFoundError):
    """Raised when a variant doesn't belong to the given product."""

    def __init__(self, product_id: str, variant_id: str):
        self.product_id = product_id
        self.variant_id = variant_id
        super().__init__(f"Variant {variant_id} not found for product {product_id}")


class CartItemNotFoundError(NotFoundError):
    """Raised when a cart item doesn't exist in the user's cart."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Cart item not found: {item_id}")


class OrderNotFoundError(NotFoundError):
    """Raised when an order doesn't exist for the user."""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class WishlistItemNotFoundError(NotFoundError):
    """Raised when a wishlist item doesn't exist for the user."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Wishlist item not found: {item_id}")


class ConflictError(StorefrontError):
    """Raised when a request conflicts with the current state of a record."""

    status_code = 409


class EmptyCartError(ConflictError):
    """Raised when checkout is attempted with no items in the cart."""

    redirect = "/cart"

    def __init__(self):
        super().__init__("Your cart is empty.")


class AlreadyInWishlistError(ConflictError):
    """Raised when a product is already on the user's wishlist."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product already in wishlist: {product_id}")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An account already exists for {email}")


class AuthenticationError(StorefrontError):
    """Raised when credentials or a session token are rejected."""

    status_code = 401

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Invalid email or password")


class CheckoutError(StorefrontError):
    """Raised when any write of the order-placement sequence fails."""

    status_code = 500

    def __init__(self, step: str):
        self.step = step
        super().__init__("Failed to place order. Please try again.")
