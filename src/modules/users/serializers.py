"""User DRF serializers for API input/output.

Input serializers validate the transport payload; the view then builds
Pydantic DTOs from ``validated_data`` for the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.core.models import BIGINT_MAX, BIGINT_MIN
from modules.users.models import User


class CreateUserSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=254)
    balance = serializers.IntegerField(
        min_value=BIGINT_MIN, max_value=BIGINT_MAX, required=False, default=0
    )


class UpdateBalanceSerializer(serializers.Serializer):
    balance = serializers.IntegerField(min_value=BIGINT_MIN, max_value=BIGINT_MAX)


class UserSerializer(serializers.ModelSerializer):
    """Read serializer for the User resource."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "balance",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
