"""Integration tests for the User API."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.users.models import User

pytestmark = pytest.mark.integration

URL = "/api/v1/users/"


class TestCreateUser:
    def test_create_returns_201(self, api_client):
        response = api_client.post(
            URL, {"email": "New@Example.com", "balance": 1000}, format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new@example.com"
        assert data["balance"] == 1000
        assert User.objects.filter(id=data["id"]).exists()

    def test_balance_defaults_to_zero(self, api_client):
        response = api_client.post(URL, {"email": "zero@example.com"}, format="json")
        assert response.json()["balance"] == 0

    def test_duplicate_email_returns_409(self, api_client, make_user):
        make_user(email="dup@example.com")

        response = api_client.post(URL, {"email": "DUP@example.com"}, format="json")

        assert response.status_code == 409
        assert response.json() == {"detail": "Email already registered."}

    def test_invalid_email_returns_400(self, api_client):
        response = api_client.post(URL, {"email": "nope"}, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "email"


class TestReadUsers:
    def test_retrieve(self, api_client, make_user):
        user = make_user(balance=7)

        response = api_client.get(f"{URL}{user.id}/")

        assert response.status_code == 200
        assert response.json()["balance"] == 7

    @pytest.mark.parametrize("pk", [str(uuid4()), "not-a-uuid"])
    def test_retrieve_unknown_returns_404(self, api_client, pk):
        response = api_client.get(f"{URL}{pk}/")
        assert response.status_code == 404
        assert response.json() == {"detail": "User not found."}

    def test_list_is_paginated_and_filterable(self, api_client, make_user):
        make_user(email="rich@example.com", balance=1000)
        make_user(email="poor@example.com", balance=1)

        response = api_client.get(URL, {"min_balance": 100})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["email"] == "rich@example.com"


class TestUpdateBalance:
    def test_patch_balance_overwrites(self, api_client, make_user):
        user = make_user(balance=10)

        response = api_client.patch(
            f"{URL}{user.id}/balance/", {"balance": -40}, format="json"
        )

        assert response.status_code == 200
        user.refresh_from_db()
        assert user.balance == -40

    def test_missing_balance_returns_400(self, api_client, make_user):
        user = make_user()
        response = api_client.patch(f"{URL}{user.id}/balance/", {}, format="json")
        assert response.status_code == 400

    def test_unknown_user_returns_404(self, api_client):
        response = api_client.patch(
            f"{URL}{uuid4()}/balance/", {"balance": 1}, format="json"
        )
        assert response.status_code == 404

    @pytest.mark.parametrize("balance", [10**20, -(10**20), 2**63])
    def test_out_of_range_balance_returns_400(self, api_client, make_user, balance):
        user = make_user(balance=10)

        response = api_client.patch(
            f"{URL}{user.id}/balance/", {"balance": balance}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "balance"
        user.refresh_from_db()
        assert user.balance == 10

    def test_balance_accepts_bigint_range(self, api_client, make_user):
        user = make_user()

        response = api_client.patch(
            f"{URL}{user.id}/balance/", {"balance": 2**63 - 1}, format="json"
        )

        assert response.status_code == 200
        user.refresh_from_db()
        assert user.balance == 2**63 - 1


class TestCreateUserBounds:
    def test_oversized_initial_balance_returns_400(self, api_client):
        response = api_client.post(
            URL, {"email": "big@example.com", "balance": 10**20}, format="json"
        )

        assert response.status_code == 400
        assert not User.objects.filter(email="big@example.com").exists()
