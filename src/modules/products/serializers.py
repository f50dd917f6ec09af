"""Product DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.core.models import INT_MAX
from modules.products.models import Product


class CreateProductSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    price = serializers.IntegerField(min_value=0, max_value=INT_MAX)
    stock = serializers.IntegerField(
        min_value=0, max_value=INT_MAX, required=False, default=0
    )


class UpdateProductSerializer(serializers.Serializer):
    """Partial update: every field is optional."""

    name = serializers.CharField(max_length=255, required=False)
    price = serializers.IntegerField(min_value=0, max_value=INT_MAX, required=False)
    stock = serializers.IntegerField(min_value=0, max_value=INT_MAX, required=False)


class UpdateStockSerializer(serializers.Serializer):
    stock = serializers.IntegerField(min_value=0, max_value=INT_MAX)


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "price",
            "stock",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
