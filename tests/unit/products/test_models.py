"""Unit tests for the Product model.

Covers:
- Valid creation and defaults (available, timestamps).
- Non-negative price DB constraint.
- Soft delete lifecycle (inherited from SoftDeleteModel).
- Default ordering and __str__ representation.
"""

from __future__ import annotations

import pytest
from django.db import IntegrityError

from modules.products.models import Product

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestProductCreation:
    def test_create_product_with_valid_data(self):
        p = Product.objects.create(name="Widget", price=9.99)
        p.refresh_from_db()
        assert p.name == "Widget"
        assert p.price == 9.99
        assert p.available is True
        assert p.is_deleted is False

    def test_id_is_generated_integer(self):
        first = Product.objects.create(name="First", price=1.0)
        second = Product.objects.create(name="Second", price=2.0)
        assert isinstance(first.id, int)
        assert second.id > first.id

    def test_timestamps_set_on_create(self):
        p = Product.objects.create(name="Timestamp Product", price=5.0)
        assert p.created_at is not None
        assert p.updated_at is not None

    def test_zero_price_is_valid(self):
        p = Product.objects.create(name="Freebie", price=0)
        p.refresh_from_db()
        assert p.price == 0


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


class TestPriceConstraint:
    def test_negative_price_rejected_by_database(self):
        with pytest.raises(IntegrityError):
            Product.objects.create(name="Widget", price=-5.0)


# ---------------------------------------------------------------------------
# Soft Delete
# ---------------------------------------------------------------------------


class TestSoftDelete:
    def test_deactivate_sets_available_false(self):
        p = Product.objects.create(name="Widget", price=1.0)
        p.deactivate()
        p.refresh_from_db()
        assert p.available is False
        assert p.is_deleted is True

    def test_deactivate_keeps_row(self):
        p = Product.objects.create(name="Widget", price=1.0)
        p.deactivate()
        assert Product.objects.filter(pk=p.pk).exists()

    def test_deactivate_refreshes_updated_at(self):
        p = Product.objects.create(name="Widget", price=1.0)
        before = p.updated_at
        p.deactivate()
        p.refresh_from_db()
        assert p.updated_at >= before

    def test_deactivate_twice_is_noop(self):
        p = Product.objects.create(name="Widget", price=1.0)
        p.deactivate()
        updated_at = Product.objects.get(pk=p.pk).updated_at
        p.deactivate()
        assert Product.objects.get(pk=p.pk).updated_at == updated_at

    def test_available_manager_excludes_deactivated(self):
        active = Product.objects.create(name="Active", price=1.0)
        gone = Product.objects.create(name="Gone", price=1.0)
        gone.deactivate()
        assert list(Product.objects.available()) == [active]
        assert Product.objects.count() == 2


# ---------------------------------------------------------------------------
# Ordering / Display
# ---------------------------------------------------------------------------


class TestOrderingAndDisplay:
    def test_default_ordering_is_ascending_id(self):
        ids = [Product.objects.create(name=f"P{i}", price=1.0).id for i in range(3)]
        assert [p.id for p in Product.objects.all()] == ids

    def test_str(self):
        p = Product.objects.create(name="Widget", price=1.0)
        assert str(p) == f"#{p.id} - Widget"
