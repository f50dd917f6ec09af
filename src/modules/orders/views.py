"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django.db import IntegrityError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    InsufficientBalance,
    InsufficientStock,
    InvalidOrderStatus,
    OrderNotFound,
    OrderTotalTooLarge,
    ProductNotFound,
    UserNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    UpdateStatusSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.users.repositories.django_repository import UserDjangoRepository

IDEMPOTENCY_HEADER = "Idempotency-Key"


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "total", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            user_repository=UserDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Supports idempotency via the ``Idempotency-Key`` header.
        Returns 200 with the stored order if the key was already used,
        201 for new orders.
        """
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        idempotency_key = request.headers.get(IDEMPOTENCY_HEADER) or None

        if idempotency_key:
            existing = self._service.find_by_idempotency_key(idempotency_key)
            if existing:
                return Response(OrderSerializer(existing).data)

        dto = CreateOrderDTO(
            user_id=data["user_id"],
            items=[
                CreateOrderItemDTO(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                )
                for item in data["items"]
            ],
            notes=data.get("notes", ""),
            idempotency_key=idempotency_key,
        )

        try:
            order = self._service.create_order(dto)
        except (UserNotFound, ProductNotFound) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_404_NOT_FOUND,
            )
        except (InsufficientStock, OrderTotalTooLarge) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except IntegrityError:
            # A concurrent request stored the same key first.
            existing = (
                self._service.find_by_idempotency_key(idempotency_key)
                if idempotency_key
                else None
            )
            if existing is None:
                raise
            return Response(OrderSerializer(existing).data)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_orders()

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (status, user, date range, total range) is handled
        by ``OrderFilter`` via ``filter_backends``.  Ordering is handled
        by ``OrderingFilter``.  Results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())

        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status/

        Accepts ``{"status": "paid" | "shipped", "notes": "..."}``.
        Moving to ``paid`` debits the user and reserves stock.
        """
        serializer = UpdateStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.update_status(
                order_id=pk,
                new_status=serializer.validated_data["status"],
                notes=serializer.validated_data.get("notes", ""),
            )
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except (InvalidOrderStatus, InsufficientBalance, InsufficientStock) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(OrderSerializer(order).data)
