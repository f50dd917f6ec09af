"""Background tasks of the core module."""

from __future__ import annotations

import structlog
from celery import shared_task
from django.db import transaction
from django.db.models import Q

from modules.core.models import EventStatus, OutboxEvent
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)

RELAY_BATCH_SIZE = 100
MAX_RELAY_RETRIES = 5


@shared_task(name="core.relay_outbox_events")
def relay_outbox_events(batch_size: int = RELAY_BATCH_SIZE) -> dict:
    """Publish pending outbox events to the in-process event bus.

    Events are processed in creation order.  ``FAILED`` events are retried
    until they reach ``MAX_RELAY_RETRIES``.  Returns a summary with the number
    of published and failed events.

    The batch is locked with ``SKIP LOCKED`` for the length of the run, so
    overlapping runs work on disjoint rows.
    """
    with transaction.atomic():
        published, failed = _relay_batch(batch_size)

    logger.info("outbox.relay_completed", published=published, failed=failed)
    return {"published": published, "failed": failed}


def _relay_batch(batch_size: int) -> tuple[int, int]:
    pending = OutboxEvent.objects.select_for_update(skip_locked=True).filter(
        Q(status=EventStatus.PENDING)
        | Q(status=EventStatus.FAILED, retry_count__lt=MAX_RELAY_RETRIES)
    ).order_by("created_at")[:batch_size]

    published = 0
    failed = 0
    for outbox_event in pending:
        log = logger.bind(
            outbox_event_id=str(outbox_event.id),
            event_type=outbox_event.event_type,
            aggregate_id=outbox_event.aggregate_id,
        )
        try:
            with transaction.atomic():
                event = DomainEvent.from_payload(
                    outbox_event.event_type, outbox_event.payload
                )
                event_bus.publish(event)
        except Exception as exc:
            outbox_event.mark_as_failed(str(exc))
            log.exception("outbox.relay_failed", retry_count=outbox_event.retry_count)
            failed += 1
            continue
        outbox_event.mark_as_published()
        published += 1
    return published, failed
