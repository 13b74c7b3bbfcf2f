"""Subscription service - lifecycle rules and state transitions live here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Reads through find_by_id and get_current_subscription reconcile the
subscription against payment recency and persist a suspension when due.
"""

import logging
from contextlib import AbstractContextManager
from datetime import date, datetime
from typing import Callable

from subscriptions.domain import AttendanceLimit, Money, State, Subscription, lifecycle
from subscriptions.domain.errors import (
    InvalidSubscriptionError,
    SubscriptionNotFoundError,
)
from subscriptions.stores.interfaces import (
    ClientDirectory,
    MembershipCatalog,
    PaymentStatusProvider,
    StateLookup,
    SubscriptionStore,
)

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Service for subscription lifecycle operations."""

    def __init__(
        self,
        store: SubscriptionStore,
        clients: ClientDirectory,
        memberships: MembershipCatalog,
        states: StateLookup,
        payment_status: PaymentStatusProvider,
        clock: Callable[[], datetime] = lifecycle.utc_now,
    ) -> None:
        self._store = store
        self._clients = clients
        self._memberships = memberships
        self._states = states
        self._payment_status = payment_status
        self._clock = clock

    def get_current_subscription(
        self, document_number: str | None = None, client_id: int | None = None
    ) -> Subscription | None:
        """Return the client's latest subscription, reconciled.

        Returns None when no identifier is given. client_id wins when both are.

        Raises:
            ClientNotFoundError: If the client does not exist.
            SubscriptionNotFoundError: If the client has no subscriptions.
        """
        if client_id is None and not document_number:
            return None
        if client_id is not None:
            client = self._clients.find_by_id(client_id)
        else:
            client = self._clients.find_by_document_number(document_number)

        current = lifecycle.select_current(client.subscriptions)
        if current is None:
            raise SubscriptionNotFoundError(client.id)
        return self.validate_up_to_date_payment(current)

    def find_by_id(self, subscription_id: int, reconcile: bool = True) -> Subscription:
        """Return a subscription by ID, reconciled unless the caller opts out.

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist.
        """
        subscription = self._store.get(subscription_id)
        if subscription is None:
            raise SubscriptionNotFoundError(subscription_id)
        if reconcile:
            subscription = self.validate_up_to_date_payment(subscription)
        return subscription

    def create(
        self, membership_id: int, client_id: int, start_date: date | None = None
    ) -> Subscription:
        """Create an Active subscription for a client.

        Raises:
            ClientNotFoundError: If the client does not exist.
            MembershipNotFoundError: If the plan does not exist.
            InvalidSubscriptionError: If start_date is in the future.
        """
        client = self._clients.find_by_id(client_id)
        membership = self._memberships.find_by_id(membership_id)
        today = self._clock().date()
        if start_date is None:
            start_date = today
        if start_date > today:
            raise InvalidSubscriptionError("Start date cannot be in the future")

        subscription = self._store.add(
            client_id=client.id,
            membership_id=membership.id,
            start_date=start_date,
            state=self._states.find_active_state(),
        )
        logger.info(
            "Subscription %s created for client %s on membership %s",
            subscription.id,
            client.id,
            membership.id,
        )
        return subscription

    def make_client_subscription_inactive(self, client_id: int) -> Subscription:
        subscription = self.get_current_subscription(client_id=client_id)
        return self._force_state(subscription, self._states.find_inactive_state())

    def make_subscription_inactive(self, subscription_id: int) -> Subscription:
        return self._force_state(
            self.find_by_id(subscription_id, reconcile=False),
            self._states.find_inactive_state(),
        )

    def make_subscription_active(self, subscription_id: int) -> Subscription:
        return self._force_state(
            self.find_by_id(subscription_id, reconcile=False),
            self._states.find_active_state(),
        )

    def make_subscription_suspended(self, subscription_id: int) -> Subscription:
        return self._force_state(
            self.find_by_id(subscription_id, reconcile=False),
            self._states.find_suspended_state(),
        )

    def validate_up_to_date_payment(self, subscription: Subscription) -> Subscription:
        """Suspend the subscription if its payment is no longer current.

        Inactive subscriptions are returned as they are without a payment check.
        """
        if self._states.is_inactive(subscription.state):
            return subscription
        payment_current = self._payment_status.validate_up_to_date_payment(
            subscription.id, self._clock()
        )
        if payment_current:
            return subscription

        result = lifecycle.reconcile(
            subscription,
            payment_current=False,
            suspended_state=self._states.find_suspended_state(),
        )
        if result.changed:
            self._store.save_state(result.subscription)
            logger.info(
                "Subscription %s suspended: payment is not up to date", subscription.id
            )
        return result.subscription

    def is_active(self, subscription: Subscription) -> bool:
        return self._states.is_active(subscription.state)

    def get_attendance_limit(self, subscription_id: int) -> AttendanceLimit:
        subscription = self.find_by_id(subscription_id, reconcile=False)
        return subscription.membership.weekly_attendance_limit

    def get_historical_unit_amount(self, subscription_id: int) -> Money:
        """Return the plan's price as of now, to be frozen into a new fee collection."""
        subscription = self.find_by_id(subscription_id, reconcile=False)
        return subscription.membership.monthly_price

    def locked(self, subscription_id: int) -> AbstractContextManager[None]:
        return self._store.lock(subscription_id)

    def _force_state(self, subscription: Subscription, target: State) -> Subscription:
        result = lifecycle.transition(subscription, target)
        if result.changed:
            self._store.save_state(result.subscription)
            logger.info(
                "Subscription %s moved from %s to %s",
                subscription.id,
                subscription.state.name,
                target.name,
            )
        return result.subscription
