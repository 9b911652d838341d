"""
Booking Event Handlers

Write an audit line for every committed booking event.
"""

import logging
from dataclasses import fields

from shared.application.message_bus import message_bus
from shared.domain.base import DomainEvent
from apps.bookings.domain.events import BookingCreated, BookingDeleted, BookingStatusChanged

audit_logger = logging.getLogger("apps.bookings.audit")

_BASE_FIELDS = {f.name for f in fields(DomainEvent)}


def log_booking_event(event: DomainEvent) -> None:
    payload = event.to_dict()
    for f in fields(event):
        if f.name not in _BASE_FIELDS:
            payload[f.name] = str(getattr(event, f.name))
    audit_logger.info("%s %s", payload["event_type"], payload)


def register_event_handlers() -> None:
    for event_type in (BookingCreated, BookingStatusChanged, BookingDeleted):
        message_bus.register_event_handler(event_type, log_booking_event)
