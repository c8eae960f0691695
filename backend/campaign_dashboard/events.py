"""
In-process event bus.

Handlers are registered per event name and awaited in registration order once
the triggering transaction has committed. A failing handler is logged and
skipped; it never fails the request that published the event.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, ClassVar, Union

from .entities import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionSubmitted:
    name: ClassVar[str] = "submission.submitted"

    campaign_id: str
    submitted_by: str
    items: tuple[str, ...]
    submission_id: str
    submission_note: str | None = None
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class DashboardItemsReviewed:
    name: ClassVar[str] = "dashboard.items_reviewed"

    campaign_id: str
    reviewed_by: str
    action: str
    status: str
    entity_types: tuple[str, ...]
    comment: str | None = None
    occurred_at: datetime = field(default_factory=utcnow)


Event = Union[SubmissionSubmitted, DashboardItemsReviewed]
Handler = Callable[[Event], Awaitable[None]]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def register(self, event_name: str, handler: Handler) -> None:
        self._handlers[event_name].append(handler)
        logger.debug(f"[events] registered {getattr(handler, '__name__', handler)!s} for {event_name}")

    def handlers(self, event_name: str) -> tuple[Handler, ...]:
        return tuple(self._handlers.get(event_name, ()))

    async def publish(self, event: Event) -> None:
        for handler in self.handlers(event.name):
            try:
                await handler(event)
            except Exception:
                logger.exception(
                    f"[events] handler {getattr(handler, '__name__', handler)!s} failed for {event.name} "
                    f"(campaign_id={event.campaign_id})"
                )
