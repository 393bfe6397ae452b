"""Tests for order history and detail."""

from datetime import UTC, datetime

import pytest

from app.database.mongodb import mongodb
from app.errors import OrderNotFoundError
from app.models.order import OrderInDB, OrderItemInDB
from app.services.order_service import order_service


async def _insert_order(user_id, address, order_number, created_at, quantities=(1,)):
    order = OrderInDB(
        user_id=user_id,
        order_number=order_number,
        subtotal=10.0 * sum(quantities),
        tax_amount=0.8 * sum(quantities),
        total_amount=10.8 * sum(quantities),
        shipping_address=address,
        billing_address=address,
        created_at=created_at,
    )
    await mongodb.insert_order(order)
    await mongodb.insert_order_items(
        [
            OrderItemInDB(
                order_id=order.id,
                product_id=f"p-{n}",
                product_name=f"Product {n}",
                quantity=quantity,
                price=10.0,
                total=10.0 * quantity,
            )
            for n, quantity in enumerate(quantities)
        ]
    )
    return order


async def test_list_orders_newest_first(user, address):
    await _insert_order(user.id, address, "ORD-1-AAAAAAAAA", datetime(2024, 1, 1, tzinfo=UTC))
    await _insert_order(user.id, address, "ORD-2-BBBBBBBBB", datetime(2024, 3, 1, tzinfo=UTC))

    orders = await order_service.list_orders(user.id)
    assert [o.order_number for o in orders] == ["ORD-2-BBBBBBBBB", "ORD-1-AAAAAAAAA"]


async def test_list_orders_counts_units(user, address):
    await _insert_order(
        user.id, address, "ORD-1-AAAAAAAAA", datetime(2024, 1, 1, tzinfo=UTC), quantities=(2, 3)
    )

    (summary,) = await order_service.list_orders(user.id)
    assert summary.item_count == 5
    assert summary.status == "pending"


async def test_list_orders_only_own(user, address):
    await _insert_order("another-user", address, "ORD-1-AAAAAAAAA", datetime(2024, 1, 1, tzinfo=UTC))
    assert await order_service.list_orders(user.id) == []


async def test_get_order(user, address):
    order = await _insert_order(
        user.id, address, "ORD-1-AAAAAAAAA", datetime(2024, 1, 1, tzinfo=UTC), quantities=(1, 1)
    )

    detail = await order_service.get_order(user.id, order.id)
    assert detail.order_number == "ORD-1-AAAAAAAAA"
    assert len(detail.items) == 2
    assert detail.shipping_address == address


async def test_get_other_users_order(user, address):
    order = await _insert_order(
        "another-user", address, "ORD-1-AAAAAAAAA", datetime(2024, 1, 1, tzinfo=UTC)
    )
    with pytest.raises(OrderNotFoundError):
        await order_service.get_order(user.id, order.id)
