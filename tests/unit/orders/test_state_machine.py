"""Unit tests for the order status state machine."""

from __future__ import annotations

import pytest

from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.unit

ALL_STATUSES = [s.value for s in OrderStatus]
ALLOWED = {("created", "paid"), ("paid", "shipped")}


class TestTransitionTable:
    def test_lifecycle_is_linear(self):
        assert VALID_TRANSITIONS == {
            "created": {"paid"},
            "paid": {"shipped"},
            "shipped": set(),
        }

    def test_shipped_is_terminal(self):
        assert TERMINAL_STATES == {"shipped"}


class TestCanTransitionTo:
    @pytest.mark.parametrize("current", ALL_STATUSES)
    @pytest.mark.parametrize("target", ALL_STATUSES)
    def test_only_forward_single_steps_allowed(self, current, target):
        order = Order(status=current)
        assert order.can_transition_to(target) is ((current, target) in ALLOWED)

    def test_enum_members_and_plain_strings_agree(self):
        order = Order()
        assert order.status == OrderStatus.CREATED
        assert order.can_transition_to(OrderStatus.PAID)
        assert order.can_transition_to("paid")

    def test_unknown_status_rejected(self):
        assert not Order(status="created").can_transition_to("cancelled")


class TestIsTerminal:
    @pytest.mark.parametrize(
        ("status", "expected"),
        [("created", False), ("paid", False), ("shipped", True)],
    )
    def test_is_terminal(self, status, expected):
        assert Order(status=status).is_terminal is expected
