"""User API views.

Exposes the ``UserService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.users.dtos import CreateUserDTO, UpdateBalanceDTO
from modules.users.exceptions import UserAlreadyExists, UserNotFound
from modules.users.filters import UserFilter
from modules.users.models import User
from modules.users.repositories.django_repository import UserDjangoRepository
from modules.users.serializers import (
    CreateUserSerializer,
    UpdateBalanceSerializer,
    UserSerializer,
)
from modules.users.services import UserService


class UserViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for User registration, look-up and balance updates.

    Uses ``UserService`` with ``UserDjangoRepository`` (DIP).
    """

    filterset_class = UserFilter
    search_fields = ["email"]
    ordering_fields = ["created_at", "email", "balance"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    queryset = User.objects.all()
    serializer_class = UserSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(repository=UserDjangoRepository())

    def get_queryset(self):
        return self._service.list_users()

    # ------------------------------------------------------------------
    # Retrieve
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/users/{pk}/"""
        try:
            user = self._service.get_user(pk)
        except UserNotFound:
            return Response(
                {"detail": "User not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(UserSerializer(user).data)

    # ------------------------------------------------------------------
    # Create / Balance
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/users/"""
        serializer = CreateUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = CreateUserDTO(**serializer.validated_data)

        try:
            user = self._service.create_user(dto)
        except UserAlreadyExists as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_409_CONFLICT,
            )

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["patch"], url_path="balance")
    def update_balance(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/users/{pk}/balance/

        Administrative overwrite: accepts ``{"balance": N}``, any integer.
        """
        serializer = UpdateBalanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = UpdateBalanceDTO(balance=serializer.validated_data["balance"])

        try:
            user = self._service.update_balance(pk, dto)
        except UserNotFound:
            return Response(
                {"detail": "User not found."},
                status=status.HTTP_404_NOT_FOUND,
            )

        return Response(UserSerializer(user).data)
