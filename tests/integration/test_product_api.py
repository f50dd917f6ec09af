"""Integration tests for the Product API."""

from __future__ import annotations

from uuid import uuid4

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


class TestCreateProduct:
    def test_create_returns_201(self, api_client):
        response = api_client.post(
            URL, {"name": "Widget", "price": 500, "stock": 10}, format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert (data["name"], data["price"], data["stock"]) == ("Widget", 500, 10)

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Widget", "price": -1},
            {"name": "Widget", "price": 1, "stock": -1},
            {"name": "Widget", "price": 10**20},
            {"name": "Widget", "price": 2**31},
            {"name": "Widget", "price": 1, "stock": 2**31},
            {"price": 1},
        ],
    )
    def test_invalid_payload_returns_400(self, api_client, payload):
        response = api_client.post(URL, payload, format="json")
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"


class TestReadProducts:
    def test_retrieve(self, api_client, make_product):
        product = make_product(name="Lamp", price=40, stock=3)

        response = api_client.get(f"{URL}{product.id}/")

        assert response.status_code == 200
        assert response.json()["name"] == "Lamp"

    def test_retrieve_unknown_returns_404(self, api_client):
        assert api_client.get(f"{URL}{uuid4()}/").status_code == 404

    def test_list_filters(self, api_client, make_product):
        make_product(name="Cheap", price=5, stock=0)
        make_product(name="Dear", price=5000, stock=2)

        in_stock = api_client.get(URL, {"in_stock": "true"}).json()
        expensive = api_client.get(URL, {"min_price": 100}).json()

        assert [p["name"] for p in in_stock["results"]] == ["Dear"]
        assert [p["name"] for p in expensive["results"]] == ["Dear"]

    def test_page_size_param(self, api_client, make_product):
        for _ in range(5):
            make_product()

        data = api_client.get(URL, {"page_size": 2}).json()

        assert data["count"] == 5
        assert len(data["results"]) == 2
        assert data["next"] is not None


class TestUpdateProduct:
    def test_patch_updates_price_and_name(self, api_client, make_product):
        product = make_product(price=10)

        response = api_client.patch(
            f"{URL}{product.id}/", {"price": 20, "name": "Renamed"}, format="json"
        )

        assert response.status_code == 200
        product.refresh_from_db()
        assert (product.name, product.price) == ("Renamed", 20)

    def test_patch_stock_action(self, api_client, make_product):
        product = make_product(stock=1)

        response = api_client.patch(
            f"{URL}{product.id}/stock/", {"stock": 50}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["stock"] == 50

    def test_negative_stock_rejected(self, api_client, make_product):
        product = make_product(stock=1)

        response = api_client.patch(
            f"{URL}{product.id}/stock/", {"stock": -5}, format="json"
        )

        assert response.status_code == 400
        product.refresh_from_db()
        assert product.stock == 1

    @pytest.mark.parametrize("url_suffix, field", [("stock/", "stock"), ("", "price")])
    def test_oversized_value_rejected(
        self, api_client, make_product, url_suffix, field
    ):
        product = make_product(price=100, stock=1)

        response = api_client.patch(
            f"{URL}{product.id}/{url_suffix}", {field: 10**20}, format="json"
        )

        assert response.status_code == 400
        product.refresh_from_db()
        assert (product.price, product.stock) == (100, 1)

    def test_unknown_product_returns_404(self, api_client):
        response = api_client.patch(f"{URL}{uuid4()}/", {"price": 1}, format="json")
        assert response.status_code == 404
