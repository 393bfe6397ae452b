import os
import uuid

# Keep password hashing fast in tests; read when settings are first built
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.api.routes import router
from app.database.mongodb import mongodb
from app.main import register_exception_handlers
from app.models.order import Address
from app.models.product import Product, ProductBase, ProductImage, ProductVariant
from app.services.auth_service import auth_service

TEST_PASSWORD = "correct-horse"


@pytest.fixture(autouse=True)
async def store():
    """Bind the global MongoDB instance to a fresh in-memory database per test."""
    client = AsyncMongoMockClient()
    mongodb.client = client
    mongodb.db = client[f"storefront_test_{uuid.uuid4().hex[:8]}"]
    await mongodb.create_indexes()

    yield mongodb

    mongodb.client = None
    mongodb.db = None


@pytest.fixture
def make_product():
    """Factory inserting a product with optional (name, price) variants."""

    async def _make(
        name: str = "Classic Tee",
        price: float = 10.0,
        variants: tuple = (),
        **fields,
    ) -> Product:
        fields.setdefault("slug", name.lower().replace(" ", "-"))
        fields.setdefault("quantity", 10)
        product = ProductBase(name=name, price=price, **fields)
        variant_models = [
            ProductVariant(product_id=product.id, name=v_name, price=v_price, quantity=5)
            for v_name, v_price in variants
        ]
        image = ProductImage(
            product_id=product.id, image_url=f"https://img.example.com/{product.slug}.jpg", position=0
        )
        await mongodb.insert_product(product, variant_models, [image])
        return Product(**product.model_dump(), images=[image], variants=variant_models)

    return _make


@pytest.fixture
async def user():
    return await auth_service.sign_up("shopper@example.com", TEST_PASSWORD)


@pytest.fixture
async def auth_headers(user):
    session = await auth_service.sign_in(user.email, TEST_PASSWORD)
    return {"Authorization": f"Bearer {session.access_token}"}


@pytest.fixture
def address():
    return Address(
        full_name="Ada Lovelace",
        address_line_1="12 Analytical Way",
        address_line_2="Flat 3",
        city="London",
        state="Greater London",
        postal_code="N1 9GU",
        country="United Kingdom",
        phone="+441234567890",
    )


@pytest.fixture
async def client():
    app = FastAPI()
    app.include_router(router)
    register_exception_handlers(app)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
