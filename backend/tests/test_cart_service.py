"""Tests for cart management."""

import pytest

from app.database.mongodb import mongodb
from app.errors import CartItemNotFoundError, ProductNotFoundError, VariantNotFoundError
from app.models.cart import MAX_LINE_QUANTITY
from app.services.cart_service import cart_service


class TestAddItem:
    async def test_add_item(self, user, make_product):
        product = await make_product(price=10.0)
        cart = await cart_service.add_item(user.id, product.id, quantity=2)

        assert len(cart.items) == 1
        line = cart.items[0]
        assert line.product.name == "Classic Tee"
        assert line.quantity == 2
        assert line.unit_price == 10.0
        assert line.line_total == 20.0
        assert line.product.image_url.endswith("classic-tee.jpg")
        assert cart.item_count == 2
        assert cart.summary.subtotal == 20.0

    async def test_same_product_increases_quantity(self, user, make_product):
        product = await make_product()
        await cart_service.add_item(user.id, product.id, quantity=1)
        cart = await cart_service.add_item(user.id, product.id, quantity=2)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    async def test_merged_quantity_is_capped(self, user, make_product):
        product = await make_product()
        for _ in range(3):
            cart = await cart_service.add_item(user.id, product.id, quantity=99)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == MAX_LINE_QUANTITY

    async def test_different_variant_creates_new_line(self, user, make_product):
        product = await make_product(variants=(("Small", None), ("Large", 12.0)))
        small, large = product.variants
        await cart_service.add_item(user.id, product.id, small.id)
        cart = await cart_service.add_item(user.id, product.id, large.id)

        assert len(cart.items) == 2

    async def test_variant_price_overrides_product_price(self, user, make_product):
        product = await make_product(price=10.0, variants=(("Large", 12.5),))
        cart = await cart_service.add_item(user.id, product.id, product.variants[0].id, 2)

        line = cart.items[0]
        assert line.variant.name == "Large"
        assert line.unit_price == 12.5
        assert line.line_total == 25.0

    async def test_variant_without_price_uses_product_price(self, user, make_product):
        product = await make_product(price=10.0, variants=(("Small", None),))
        cart = await cart_service.add_item(user.id, product.id, product.variants[0].id)

        assert cart.items[0].unit_price == 10.0

    async def test_unknown_product(self, user):
        with pytest.raises(ProductNotFoundError):
            await cart_service.add_item(user.id, "missing")

    async def test_inactive_product(self, user, make_product):
        product = await make_product(status="draft")
        with pytest.raises(ProductNotFoundError):
            await cart_service.add_item(user.id, product.id)

    async def test_variant_of_another_product(self, user, make_product):
        tee = await make_product()
        mug = await make_product(name="Mug", variants=(("Blue", None),))
        with pytest.raises(VariantNotFoundError):
            await cart_service.add_item(user.id, tee.id, mug.variants[0].id)


class TestUpdateQuantity:
    async def test_update_quantity(self, user, make_product):
        product = await make_product(price=4.0)
        cart = await cart_service.add_item(user.id, product.id)
        cart = await cart_service.update_quantity(user.id, cart.items[0].id, 5)

        assert cart.items[0].quantity == 5
        assert cart.summary.subtotal == 20.0

    async def test_zero_quantity_removes_item(self, user, make_product):
        product = await make_product()
        cart = await cart_service.add_item(user.id, product.id)
        cart = await cart_service.update_quantity(user.id, cart.items[0].id, 0)

        assert cart.items == []
        assert cart.summary.total_amount == 0

    async def test_cannot_update_another_users_item(self, user, make_product):
        product = await make_product()
        cart = await cart_service.add_item(user.id, product.id)
        with pytest.raises(CartItemNotFoundError):
            await cart_service.update_quantity("someone-else", cart.items[0].id, 3)


class TestRemoveItem:
    async def test_remove_item(self, user, make_product):
        product = await make_product()
        cart = await cart_service.add_item(user.id, product.id)
        cart = await cart_service.remove_item(user.id, cart.items[0].id)
        assert cart.items == []

    async def test_remove_unknown_item(self, user):
        with pytest.raises(CartItemNotFoundError):
            await cart_service.remove_item(user.id, "missing")

    async def test_clear(self, user, make_product):
        await cart_service.add_item(user.id, (await make_product()).id)
        await cart_service.add_item(user.id, (await make_product(name="Mug")).id)

        assert await cart_service.clear(user.id) == 2
        assert (await cart_service.get_cart(user.id)).items == []


async def test_cart_totals_include_tax(user, make_product):
    tee = await make_product(price=10.0)
    mug = await make_product(name="Mug", price=5.0)
    await cart_service.add_item(user.id, tee.id, quantity=2)
    cart = await cart_service.add_item(user.id, mug.id, quantity=1)

    assert cart.summary.subtotal == 25.0
    assert cart.summary.tax_amount == 2.0
    assert cart.summary.total_amount == 27.0


class TestDeletedProducts:
    async def test_items_for_deleted_products_are_removed(self, user, make_product):
        tee = await make_product()
        mug = await make_product(name="Mug")
        await cart_service.add_item(user.id, tee.id)
        await cart_service.add_item(user.id, mug.id)
        await mongodb.db["products"].delete_one({"id": mug.id})

        cart = await cart_service.get_cart(user.id)

        assert [line.product_id for line in cart.items] == [tee.id]
        stored = await mongodb.get_cart_items(user.id)
        assert [item["product_id"] for item in stored] == [tee.id]

    async def test_other_users_items_are_untouched(self, user, make_product):
        mug = await make_product(name="Mug")
        await cart_service.add_item(user.id, mug.id)
        await cart_service.add_item("someone-else", mug.id)
        await mongodb.db["products"].delete_one({"id": mug.id})

        assert (await cart_service.get_cart(user.id)).items == []
        assert len(await mongodb.get_cart_items("someone-else")) == 1
