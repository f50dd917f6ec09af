"""Event bus contracts.

The outbox relay and the order handlers depend on these protocols only;
``shared.infrastructure.bus`` provides the in-process implementation.
"""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    def publish(self, event: DomainEvent) -> None:
        """Deliver *event* to every handler subscribed to its class."""

    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None:
        """Register *handler* for *event_class*; duplicates are ignored."""
