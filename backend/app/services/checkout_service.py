"""Checkout service: order totals and the order-placement sequence."""

import logging

from pymongo.errors import DuplicateKeyError, PyMongoError

from app.config import get_settings
from app.database.mongodb import mongodb
from app.errors import CheckoutError, EmptyCartError
from app.models.cart import CartLine, CartResponse
from app.models.order import CheckoutRequest, OrderDetail, OrderInDB, OrderItemInDB
from app.services.cart_service import CartService
from app.services.pricing import calculate_totals, line_total
from app.utils.helpers import generate_order_number

logger = logging.getLogger(__name__)
settings = get_settings()

# Failures of a store write; ConnectionError when the database is not connected
STORE_ERRORS = (PyMongoError, ConnectionError)


class CheckoutService:
    """Turns a user's cart into an order.

    Placing an order issues three writes in order: the order header, its line
    items, then deletion of the cart. They are not transactional. A failure
    while writing line items deletes the header again; a failure clearing the
    cart leaves the completed order in place.
    """

    @staticmethod
    async def get_summary(user_id: str) -> CartResponse:
        """Cart snapshot and totals for the checkout page.

        Raises:
            EmptyCartError: if there is nothing to check out
        """
        cart = await CartService.get_cart(user_id)
        if not cart.items:
            raise EmptyCartError()
        return cart

    @staticmethod
    def build_order_items(order_id: str, lines: list[CartLine]) -> list[OrderItemInDB]:
        """Capture each cart line as an order line item."""
        return [
            OrderItemInDB(
                order_id=order_id,
                product_id=line.product_id,
                variant_id=line.variant_id,
                product_name=line.product.name,
                variant_name=line.variant.name if line.variant else None,
                quantity=line.quantity,
                price=line.unit_price,
                total=line_total(line.unit_price, line.quantity),
            )
            for line in lines
        ]

    @staticmethod
    async def _insert_order_header(order: OrderInDB) -> OrderInDB:
        """Insert the header, drawing a fresh order number on collision."""
        for attempt in range(1, settings.order_number_attempts + 1):
            try:
                await mongodb.insert_order(order)
                return order
            except DuplicateKeyError:
                logger.warning(
                    "Order number %s already used (attempt %d)", order.order_number, attempt
                )
                order = order.model_copy(update={"order_number": generate_order_number()})
        logger.error(
            "No unique order number after %d attempts", settings.order_number_attempts
        )
        raise CheckoutError("order_number")

    @staticmethod
    async def place_order(user_id: str, request: CheckoutRequest) -> OrderDetail:
        """Place an order for everything in the user's cart.

        Raises:
            EmptyCartError: if the cart has no items
            CheckoutError: if any store write fails
        """
        try:
            lines = await CartService.get_cart_lines(user_id)
        except STORE_ERRORS as e:
            logger.error("Failed to load cart for user %s: %s", user_id, e)
            raise CheckoutError("load_cart") from e

        if not lines:
            raise EmptyCartError()

        totals = calculate_totals((line.unit_price, line.quantity) for line in lines)
        order = OrderInDB(
            user_id=user_id,
            order_number=generate_order_number(),
            subtotal=totals.subtotal,
            tax_amount=totals.tax_amount,
            shipping_amount=totals.shipping_amount,
            total_amount=totals.total_amount,
            shipping_address=request.shipping_address,
            billing_address=request.resolve_billing_address(),
        )

        try:
            order = await CheckoutService._insert_order_header(order)
        except STORE_ERRORS as e:
            logger.error("Failed to create order header for user %s: %s", user_id, e)
            raise CheckoutError("create_order") from e
        logger.info("Created order %s (%s) for user %s", order.order_number, order.id, user_id)

        items = CheckoutService.build_order_items(order.id, lines)
        try:
            await mongodb.insert_order_items(items)
        except STORE_ERRORS as e:
            logger.error("Failed to create items for order %s: %s", order.order_number, e)
            try:
                await mongodb.delete_order(order.id)
                logger.info("Removed incomplete order %s", order.order_number)
            except STORE_ERRORS as cleanup_error:
                logger.error(
                    "Failed to remove incomplete order %s: %s", order.order_number, cleanup_error
                )
            raise CheckoutError("create_order_items") from e

        try:
            await mongodb.delete_cart_items(user_id)
        except STORE_ERRORS as e:
            logger.error(
                "Order %s placed but cart for user %s was not cleared: %s",
                order.order_number,
                user_id,
                e,
            )
            raise CheckoutError("clear_cart") from e

        logger.info(
            "Order %s placed: %d items, total %.2f",
            order.order_number,
            len(items),
            order.total_amount,
        )
        return OrderDetail(**order.model_dump(), items=items)


# Global checkout service instance
checkout_service = CheckoutService()
