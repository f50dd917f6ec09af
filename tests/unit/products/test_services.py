"""Unit tests for ProductService with a mocked repository."""

from __future__ import annotations

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    mock = MagicMock(spec=IProductRepository)
    mock.save.side_effect = lambda product: product
    return mock


@pytest.fixture()
def service(repo):
    return ProductService(repository=repo)


def test_create_product(service, repo):
    product = service.create_product(
        CreateProductDTO(name="Widget", price=250, stock=4)
    )

    assert (product.name, product.price, product.stock) == ("Widget", 250, 4)
    repo.save.assert_called_once()


def test_update_product_changes_only_supplied_fields(service, repo):
    product = Product(name="Widget", price=250, stock=4)
    repo.get_by_id.return_value = product

    result = service.update_product(str(product.id), UpdateProductDTO(price=300))

    assert result.price == 300
    assert result.name == "Widget"
    assert result.stock == 4


def test_update_product_can_zero_stock(service, repo):
    product = Product(name="Widget", price=250, stock=4)
    repo.get_by_id.return_value = product

    result = service.update_product(str(product.id), UpdateProductDTO(stock=0))

    assert result.stock == 0


def test_update_missing_product_raises(service, repo):
    repo.get_by_id.return_value = None

    with pytest.raises(ProductNotFound):
        service.update_product(str(uuid4()), UpdateProductDTO(name="x"))

    repo.save.assert_not_called()


def test_get_product_missing_raises(service, repo):
    repo.get_by_id.return_value = None
    with pytest.raises(ProductNotFound):
        service.get_product(str(uuid4()))


def test_list_products_delegates(service, repo):
    service.list_products({"stock__gt": 0})
    repo.list.assert_called_once_with({"stock__gt": 0})
