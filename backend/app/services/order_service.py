"""Order history service."""

import logging
from collections import defaultdict

from app.database.mongodb import mongodb
from app.errors import OrderNotFoundError
from app.models.order import OrderDetail, OrderItemInDB, OrderSummary

logger = logging.getLogger(__name__)


class OrderService:
    """Read access to a user's placed orders."""

    @staticmethod
    async def list_orders(user_id: str) -> list[OrderSummary]:
        """A user's orders, newest first, with total units per order."""
        orders = await mongodb.list_orders(user_id)
        quantities: dict[str, int] = defaultdict(int)
        for item in await mongodb.get_order_items([o["id"] for o in orders]):
            quantities[item["order_id"]] += item["quantity"]

        return [
            OrderSummary(
                id=o["id"],
                order_number=o["order_number"],
                total_amount=o["total_amount"],
                status=o["status"],
                payment_status=o["payment_status"],
                item_count=quantities[o["id"]],
                created_at=o["created_at"],
            )
            for o in orders
        ]

    @staticmethod
    async def get_order(user_id: str, order_id: str) -> OrderDetail:
        """Order header and items; orders of other users are not found."""
        order = await mongodb.get_order(user_id, order_id)
        if not order:
            raise OrderNotFoundError(order_id)

        items = await mongodb.get_order_items([order_id])
        return OrderDetail(**order, items=[OrderItemInDB(**i) for i in items])


# Global order service instance
order_service = OrderService()
