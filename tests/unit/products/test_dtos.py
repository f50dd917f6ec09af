"""Unit tests for Product DTOs (Pydantic v2)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, UpdateProductDTO

pytestmark = pytest.mark.unit


class TestCreateProductDTO:
    def test_valid_dto(self):
        dto = CreateProductDTO(name="Widget", price=500, stock=10)
        assert (dto.name, dto.price, dto.stock) == ("Widget", 500, 10)

    def test_stock_defaults_to_zero(self):
        assert CreateProductDTO(name="Widget", price=1).stock == 0

    def test_zero_price_allowed(self):
        assert CreateProductDTO(name="Freebie", price=0).price == 0

    def test_name_is_stripped(self):
        assert CreateProductDTO(name="  Widget ", price=1).name == "Widget"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name):
        with pytest.raises(ValidationError, match="Name must not be empty"):
            CreateProductDTO(name=name, price=1)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            CreateProductDTO(name="Widget", price=-1)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            CreateProductDTO(name="Widget", price=1, stock=-1)


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        dto = UpdateProductDTO()
        assert dto.name is None and dto.price is None and dto.stock is None

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(stock=-3)
