"""
Unit of Work Pattern

Manages database transactions and ensures that domain events
are published only after successful transaction commit.

Storage waits are bounded: PostgreSQL transactions get a `lock_timeout`,
SQLite connections a busy `timeout`. When a wait runs out Django raises
OperationalError; `run_atomically` retries those with exponential backoff
and finally reports TransientError.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, TypeVar
import logging
import time

from django.conf import settings
from django.db import OperationalError, connection, transaction

from shared.domain.base import DomainEvent
from shared.domain.exceptions import TransientError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass

    @abstractmethod
    def record(self, event: DomainEvent):
        """Queue an event for publication after commit"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork() as uow:
            vehicle = vehicle_repo.find_by_id(vehicle_id, lock=True)
            booking = booking_repo.create(...)
            uow.record(BookingCreated(aggregate_id=booking.pk, ...))
            # Transaction commits here
        # Events are published after commit
    """

    def __init__(self, lock_timeout_ms: int | None = None):
        self._events: List[DomainEvent] = []
        self._transaction = None
        self._lock_timeout_ms = (
            lock_timeout_ms if lock_timeout_ms is not None else settings.RENTAL_LOCK_TIMEOUT_MS
        )

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        try:
            self._apply_lock_timeout()
        except BaseException as exc:
            self._transaction.__exit__(type(exc), exc, exc.__traceback__)
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def _apply_lock_timeout(self):
        if connection.vendor != "postgresql" or not self._lock_timeout_ms:
            return
        with connection.cursor() as cursor:
            cursor.execute(
                "SELECT set_config('lock_timeout', %s, true)",
                [f"{int(self._lock_timeout_ms)}ms"],
            )

    def commit(self):
        """
        Schedule event publishing

        Events are published using Django's transaction.on_commit()
        to ensure they're only sent after database commit succeeds.
        """
        events = self._events.copy()
        self._events.clear()
        logger.debug("Committing unit of work with %s events", len(events))

        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        """Rollback changes and discard events"""
        if self._events:
            logger.info("Rolling back unit of work, discarding %s events", len(self._events))
        self._events.clear()

    def record(self, event: DomainEvent):
        self._events.append(event)

    def _publish_events(self, events: List[DomainEvent]):
        """
        Publish collected events to message bus

        Called after successful transaction commit.
        """
        from shared.application.message_bus import message_bus

        message_bus.publish_events(events)


def run_atomically(
    operation: Callable[[DjangoUnitOfWork], T],
    *,
    attempts: int | None = None,
    backoff: float | None = None,
) -> T:
    """
    Run `operation` inside a fresh unit of work, retrying storage timeouts.

    Only OperationalError (lock timeout, deadlock, busy database) is
    retried. Domain errors raised by `operation` propagate on the first
    attempt. Inside an outer atomic block a failed statement breaks the
    whole block, so the operation runs exactly once there.
    """
    attempts = attempts if attempts is not None else settings.RENTAL_TRANSACTION_RETRIES
    backoff = backoff if backoff is not None else settings.RENTAL_RETRY_BACKOFF_SECONDS
    if connection.in_atomic_block:
        attempts = 1
    attempts = max(attempts, 1)

    for attempt in range(1, attempts + 1):
        try:
            with DjangoUnitOfWork() as uow:
                return operation(uow)
        except OperationalError as exc:
            if attempt == attempts:
                logger.error(
                    "Giving up on %s after %s attempt(s): %s",
                    getattr(operation, "__name__", "operation"),
                    attempt,
                    exc,
                )
                raise TransientError() from exc
            delay = backoff * (2 ** (attempt - 1))
            logger.warning(
                "Storage contention on attempt %s/%s, retrying in %.3fs: %s",
                attempt,
                attempts,
                delay,
                exc,
            )
            if delay:
                time.sleep(delay)
    raise TransientError()
