import pytest

from modules.core.rpc.dispatcher import MessageDispatcher
from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def dispatcher():
    """Dispatcher wired with the project's real command tables."""
    return MessageDispatcher.from_settings()


@pytest.fixture()
def make_product():
    """Factory that persists a Product with sensible defaults."""

    def _make(**overrides) -> Product:
        defaults = {"name": "Widget", "price": 9.99}
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
