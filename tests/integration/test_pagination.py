"""Integration tests for the paginated product listing."""

from __future__ import annotations

import math

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.integration


@pytest.fixture()
def product_batch():
    """23 available products plus 4 removed ones."""
    Product.objects.bulk_create(
        [Product(name=f"Product {idx:03d}", price=9.99) for idx in range(1, 24)]
    )
    Product.objects.bulk_create(
        [Product(name=f"Removed {idx}", price=1.0, available=False) for idx in range(4)]
    )
    return list(Product.objects.available())


@pytest.fixture()
def find_all(dispatcher):
    def _find_all(**data):
        packet = {"pattern": {"cmd": "find_all_products"}, "data": data, "id": "page"}
        return dispatcher.dispatch(packet)

    return _find_all


class TestPagination:
    def test_default_window(self, find_all, product_batch):
        result = find_all()["response"]
        assert len(result["data"]) == 10
        assert result["meta"] == {"total": 23, "page": 1, "lastPage": 3}

    @pytest.mark.parametrize("limit", [1, 5, 10, 23, 50])
    def test_first_page_size_and_last_page(self, find_all, product_batch, limit):
        result = find_all(page=1, limit=limit)["response"]
        assert len(result["data"]) == min(limit, 23)
        assert result["meta"]["lastPage"] == math.ceil(23 / limit)

    def test_last_page_holds_remainder(self, find_all, product_batch):
        result = find_all(page=3, limit=10)["response"]
        assert [p["id"] for p in result["data"]] == [p.id for p in product_batch[20:]]

    def test_page_past_the_end(self, find_all, product_batch):
        result = find_all(page=10, limit=10)["response"]
        assert result["data"] == []
        assert result["meta"] == {"total": 23, "page": 10, "lastPage": 3}

    def test_huge_page_is_empty(self, find_all, product_batch):
        result = find_all(page=10**19, limit=10)["response"]
        assert result["data"] == []
        assert result["meta"] == {"total": 23, "page": 10**19, "lastPage": 3}

    def test_huge_limit_returns_everything(self, find_all, product_batch):
        result = find_all(page=1, limit=10**19)["response"]
        assert [p["id"] for p in result["data"]] == [p.id for p in product_batch]
        assert result["meta"] == {"total": 23, "page": 1, "lastPage": 1}

    def test_only_available_products(self, find_all, product_batch):
        result = find_all(page=1, limit=100)["response"]
        assert all(p["available"] for p in result["data"])
        assert len(result["data"]) == 23

    def test_pages_are_disjoint_and_ordered(self, find_all, product_batch):
        ids = []
        for page in range(1, 4):
            ids.extend(p["id"] for p in find_all(page=page, limit=10)["response"]["data"])
        assert ids == sorted(ids)
        assert ids == [p.id for p in product_batch]

    def test_repeated_calls_are_stable(self, find_all, product_batch):
        assert find_all(page=2, limit=7) == find_all(page=2, limit=7)

    def test_empty_table(self, find_all):
        result = find_all()["response"]
        assert result == {"data": [], "meta": {"total": 0, "page": 1, "lastPage": 0}}

    @pytest.mark.parametrize("data", [{"page": 0}, {"limit": 0}, {"limit": -1}, {"page": "x"}])
    def test_invalid_window_rejected(self, find_all, data):
        response = find_all(**data)
        assert response["err"]["status"] == 400

    def test_unknown_field_rejected(self, find_all):
        response = find_all(page=1, limit=10, available=False)
        assert response["err"]["message"] == ["available: Extra inputs are not permitted"]
