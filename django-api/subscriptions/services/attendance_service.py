"""Attendance service - weekly quota enforcement."""

import logging
from datetime import datetime
from typing import Callable

from subscriptions.domain import Attendance, DocumentNumber, Outcome, lifecycle
from subscriptions.domain.errors import SubscriptionNotFoundError
from subscriptions.domain.models import (
    ATTENDANCE_LIMIT_EXCEEDED,
    INACTIVE_SUBSCRIPTION,
    NO_ACTIVE_SUBSCRIPTION,
)
from subscriptions.services.subscription_service import SubscriptionService
from subscriptions.stores.interfaces import AttendanceStore

logger = logging.getLogger(__name__)


class AttendanceService:
    """Service for recording attendances against the weekly limit."""

    def __init__(
        self,
        store: AttendanceStore,
        subscriptions: SubscriptionService,
        clock: Callable[[], datetime] = lifecycle.utc_now,
    ) -> None:
        self._store = store
        self._subscriptions = subscriptions
        self._clock = clock

    def create(self, document_number: str) -> Outcome:
        """Record an attendance for the client's current subscription.

        State and weekly count are checked under the subscription lock,
        against a fresh read of the subscription.

        Denials come back as an Outcome; a client that cannot be found by
        document number raises ClientNotFoundError.
        """
        try:
            document = DocumentNumber(value=document_number)
        except ValueError:
            return Outcome.denied(NO_ACTIVE_SUBSCRIPTION)
        try:
            subscription = self._subscriptions.get_current_subscription(
                document_number=document.value
            )
        except SubscriptionNotFoundError:
            subscription = None
        if subscription is None:
            return Outcome.denied(NO_ACTIVE_SUBSCRIPTION)

        with self._subscriptions.locked(subscription.id):
            subscription = self._subscriptions.find_by_id(subscription.id, reconcile=False)
            if not self._subscriptions.is_active(subscription):
                logger.info(
                    "Attendance denied for subscription %s: state is %s",
                    subscription.id,
                    subscription.state.name,
                )
                return Outcome.denied(INACTIVE_SUBSCRIPTION)

            now = self._clock()
            count = self.count_current_week(subscription.id, now)
            limit = self._subscriptions.get_attendance_limit(subscription.id)
            if limit.is_reached_by(count):
                logger.info(
                    "Attendance denied for subscription %s: %s of %s used this week",
                    subscription.id,
                    count,
                    limit.value,
                )
                return Outcome.denied(ATTENDANCE_LIMIT_EXCEEDED)
            attendance = self._store.add(subscription_id=subscription.id, date_time=now)

        return Outcome.ok(attendance)

    def count_current_week(self, subscription_id: int, now: datetime | None = None) -> int:
        start, end = lifecycle.week_window(now or self._clock())
        return self._store.count_between(subscription_id, start, end)

    def list_for_subscription(self, subscription_id: int) -> list[Attendance]:
        """Return a subscription's attendances, most recent first.

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist.
        """
        self._subscriptions.find_by_id(subscription_id, reconcile=False)
        return self._store.list_for_subscription(subscription_id)
