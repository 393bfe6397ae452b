"""Tests for the wishlist."""

import pytest

from app.errors import AlreadyInWishlistError, ProductNotFoundError, WishlistItemNotFoundError
from app.services.wishlist_service import wishlist_service


async def test_add_and_list(user, make_product):
    product = await make_product(name="Earbuds", price=59.99, compare_at_price=79.99)
    await wishlist_service.add_item(user.id, product.id)

    (entry,) = await wishlist_service.list_items(user.id)
    assert entry.name == "Earbuds"
    assert entry.price == 59.99
    assert entry.discount_percentage == 25
    assert entry.in_stock is True
    assert entry.image_url.endswith("earbuds.jpg")


async def test_duplicate_product(user, make_product):
    product = await make_product()
    await wishlist_service.add_item(user.id, product.id)
    with pytest.raises(AlreadyInWishlistError):
        await wishlist_service.add_item(user.id, product.id)


async def test_same_product_for_different_users(user, make_product):
    product = await make_product()
    await wishlist_service.add_item(user.id, product.id)
    await wishlist_service.add_item("another-user", product.id)

    assert len(await wishlist_service.list_items(user.id)) == 1


async def test_unknown_product(user):
    with pytest.raises(ProductNotFoundError):
        await wishlist_service.add_item(user.id, "missing")


async def test_remove(user, make_product):
    item = await wishlist_service.add_item(user.id, (await make_product()).id)
    await wishlist_service.remove_item(user.id, item.id)
    assert await wishlist_service.list_items(user.id) == []


async def test_remove_unknown(user):
    with pytest.raises(WishlistItemNotFoundError):
        await wishlist_service.remove_item(user.id, "missing")


async def test_move_to_cart(user, make_product):
    product = await make_product(price=8.0)
    item = await wishlist_service.add_item(user.id, product.id)

    cart = await wishlist_service.move_to_cart(user.id, item.id)

    assert [line.product_id for line in cart.items] == [product.id]
    assert cart.items[0].quantity == 1
    assert await wishlist_service.list_items(user.id) == []
