"""Fee collection service - payment recording and payment recency.

FeePaymentStatus answers "is payment current?" for the subscription service,
which keeps that service independent of FeeCollectionService.
"""

import logging
from datetime import date, datetime
from typing import Callable

from subscriptions.domain import (
    DocumentNumber,
    FeeCollection,
    Outcome,
    PaidMonths,
    lifecycle,
)
from subscriptions.domain.errors import (
    InvalidFeeCollectionError,
    SubscriptionNotFoundError,
)
from subscriptions.domain.models import NO_ACTIVE_SUBSCRIPTION
from subscriptions.services.subscription_service import SubscriptionService
from subscriptions.stores.interfaces import FeeCollectionStore, PaymentStatusProvider

logger = logging.getLogger(__name__)


class FeePaymentStatus(PaymentStatusProvider):
    """Payment recency computed from the latest fee collection."""

    def __init__(
        self,
        store: FeeCollectionStore,
        clock: Callable[[], datetime] = lifecycle.utc_now,
    ) -> None:
        self._store = store
        self._clock = clock

    def validate_up_to_date_payment(
        self, subscription_id: int, now: datetime | None = None
    ) -> bool:
        return lifecycle.is_payment_current(
            self._store.list_for_subscription(subscription_id), now or self._clock()
        )


class FeeCollectionService:
    """Service for recording fee collections."""

    def __init__(
        self,
        store: FeeCollectionStore,
        subscriptions: SubscriptionService,
        payment_status: PaymentStatusProvider,
        clock: Callable[[], datetime] = lifecycle.utc_now,
    ) -> None:
        self._store = store
        self._subscriptions = subscriptions
        self._payment_status = payment_status
        self._clock = clock

    def create(
        self,
        document_number: str,
        paid_months: int,
        collected_on: date | None = None,
    ) -> Outcome:
        """Record a payment against the client's current subscription.

        The plan's current price is frozen into the record and the
        subscription is made Active, whatever state it was in.

        Returns:
            Outcome carrying the FeeCollection, or a denial when the client
            has no subscription.

        Raises:
            InvalidFeeCollectionError: If the date is in the future, the
                document number is blank or paid_months is not positive.
            ClientNotFoundError: If the client does not exist.
        """
        today = self._clock().date()
        if collected_on is None:
            collected_on = today
        if collected_on > today:
            raise InvalidFeeCollectionError("Fee collection date cannot be in the future")
        try:
            months = PaidMonths(value=paid_months)
            document = DocumentNumber(value=document_number)
        except ValueError as exc:
            raise InvalidFeeCollectionError(str(exc)) from exc

        try:
            subscription = self._subscriptions.get_current_subscription(
                document_number=document.value
            )
        except SubscriptionNotFoundError:
            subscription = None
        if subscription is None:
            return Outcome.denied(NO_ACTIVE_SUBSCRIPTION)

        with self._subscriptions.locked(subscription.id):
            unit_amount = self._subscriptions.get_historical_unit_amount(subscription.id)
            fee_collection = self._store.add(
                subscription_id=subscription.id,
                collected_on=collected_on,
                historical_unit_amount=unit_amount,
                paid_months=months,
            )
            self._subscriptions.make_subscription_active(subscription.id)

        logger.info(
            "Fee collection %s recorded for subscription %s: %s month(s) at %s",
            fee_collection.id,
            subscription.id,
            months.value,
            unit_amount,
        )
        return Outcome.ok(fee_collection)

    def validate_up_to_date_payment(
        self, subscription_id: int, now: datetime | None = None
    ) -> bool:
        return self._payment_status.validate_up_to_date_payment(subscription_id, now)

    def list_for_subscription(self, subscription_id: int) -> list[FeeCollection]:
        """Return a subscription's fee collections, most recent first.

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist.
        """
        self._subscriptions.find_by_id(subscription_id, reconcile=False)
        return self._store.list_for_subscription(subscription_id)

    def get_due_date(self, subscription_id: int) -> date | None:
        """Return the date the latest payment stops covering, or None if unpaid.

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist.
        """
        self._subscriptions.find_by_id(subscription_id, reconcile=False)
        latest = lifecycle.latest_fee_collection(
            self._store.list_for_subscription(subscription_id)
        )
        return latest.due_date if latest else None
