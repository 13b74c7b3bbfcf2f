"""Unit tests for SubscriptionService.

These test lifecycle rules and domain error mapping over in-memory stores.
Run with: pytest tests/test_services.py -v
"""

from datetime import date
from decimal import Decimal

import pytest

from subscriptions.domain import AttendanceLimit, Money
from subscriptions.domain.errors import (
    ClientNotFoundError,
    InvalidSubscriptionError,
    MembershipNotFoundError,
    StateNotFoundError,
    SubscriptionNotFoundError,
)
from subscriptions.stores.interfaces import PaymentStatusProvider

from conftest import ACTIVE, INACTIVE, SUSPENDED, InMemoryStateLookup


class CountingPaymentStatus(PaymentStatusProvider):
    def __init__(self, current: bool) -> None:
        self.current = current
        self.calls: list[int] = []

    def validate_up_to_date_payment(self, subscription_id, now=None) -> bool:
        self.calls.append(subscription_id)
        return self.current


class TestGetCurrentSubscription:
    def test_no_identifier_returns_none(self, gym):
        assert gym.subscriptions.get_current_subscription() is None

    def test_returns_latest_start_date(self, gym):
        first = gym.enroll(start_date=date(2025, 1, 1))
        plan = gym.memberships.add()
        latest = gym.subscriptions.create(plan.id, first.client_id, date(2025, 6, 1))
        gym.subscriptions.create(plan.id, first.client_id, date(2025, 3, 1))

        current = gym.subscriptions.get_current_subscription(document_number="12345678")

        assert current.id == latest.id

    def test_lookup_by_client_id(self, gym):
        subscription = gym.enroll()
        current = gym.subscriptions.get_current_subscription(client_id=subscription.client_id)
        assert current.id == subscription.id

    def test_unknown_client_raises_not_found(self, gym):
        with pytest.raises(ClientNotFoundError):
            gym.subscriptions.get_current_subscription(document_number="00000000")

    def test_client_without_subscriptions_raises_without_payment_check(self, gym):
        payment_status = CountingPaymentStatus(current=True)
        gym.subscriptions._payment_status = payment_status
        client_id = gym.clients.add("99999999")

        with pytest.raises(SubscriptionNotFoundError):
            gym.subscriptions.get_current_subscription(client_id=client_id)
        assert payment_status.calls == []

    def test_unpaid_subscription_is_suspended_on_read(self, gym):
        subscription = gym.enroll()

        current = gym.subscriptions.get_current_subscription(document_number="12345678")

        assert current.state == SUSPENDED
        assert gym.subscription_store.get(subscription.id).state == SUSPENDED

    def test_paid_subscription_stays_active(self, gym):
        subscription = gym.enroll()
        gym.pay(subscription, on=date(2025, 8, 15))

        current = gym.subscriptions.get_current_subscription(document_number="12345678")

        assert current.state == ACTIVE
        assert gym.subscription_store.state_writes == 0


class TestFindById:
    def test_missing_subscription_raises_not_found(self, gym):
        with pytest.raises(SubscriptionNotFoundError):
            gym.subscriptions.find_by_id(404)

    def test_reconciles_by_default(self, gym):
        subscription = gym.enroll()
        assert gym.subscriptions.find_by_id(subscription.id).state == SUSPENDED

    def test_reconcile_can_be_skipped(self, gym):
        subscription = gym.enroll()
        found = gym.subscriptions.find_by_id(subscription.id, reconcile=False)
        assert found.state == ACTIVE
        assert gym.subscription_store.state_writes == 0

    def test_repeated_reads_write_suspension_once(self, gym):
        subscription = gym.enroll()
        gym.subscriptions.find_by_id(subscription.id)
        gym.subscriptions.find_by_id(subscription.id)
        assert gym.subscription_store.state_writes == 1

    def test_inactive_is_not_suspended_on_read(self, gym):
        subscription = gym.enroll()
        gym.subscriptions.make_subscription_inactive(subscription.id)
        assert gym.subscriptions.find_by_id(subscription.id).state == INACTIVE

    def test_inactive_read_skips_payment_check(self, gym):
        subscription = gym.enroll()
        gym.subscriptions.make_subscription_inactive(subscription.id)
        payment_status = CountingPaymentStatus(current=False)
        gym.subscriptions._payment_status = payment_status

        gym.subscriptions.find_by_id(subscription.id)

        assert payment_status.calls == []


class TestCreate:
    def test_new_subscription_is_active(self, gym):
        subscription = gym.enroll(start_date=date(2025, 8, 1))
        assert subscription.state == ACTIVE
        assert subscription.start_date == date(2025, 8, 1)

    def test_active_even_when_previous_was_suspended(self, gym):
        old = gym.enroll(start_date=date(2025, 1, 1))
        gym.subscriptions.make_subscription_suspended(old.id)
        plan = gym.memberships.add()

        new = gym.subscriptions.create(plan.id, old.client_id)

        assert new.state == ACTIVE

    def test_start_date_defaults_to_today(self, gym):
        client_id = gym.clients.add("11111111")
        plan = gym.memberships.add()
        subscription = gym.subscriptions.create(plan.id, client_id)
        assert subscription.start_date == gym.clock.now.date()

    def test_future_start_date_is_rejected(self, gym):
        client_id = gym.clients.add("11111111")
        plan = gym.memberships.add()
        with pytest.raises(InvalidSubscriptionError):
            gym.subscriptions.create(plan.id, client_id, date(2025, 9, 1))

    def test_unknown_membership_raises_not_found(self, gym):
        client_id = gym.clients.add("11111111")
        with pytest.raises(MembershipNotFoundError):
            gym.subscriptions.create(999, client_id)

    def test_unknown_client_raises_not_found(self, gym):
        plan = gym.memberships.add()
        with pytest.raises(ClientNotFoundError):
            gym.subscriptions.create(plan.id, 999)


class TestForcedTransitions:
    def test_make_client_subscription_inactive(self, gym):
        subscription = gym.enroll()
        result = gym.subscriptions.make_client_subscription_inactive(subscription.client_id)
        assert result.state == INACTIVE
        assert gym.subscription_store.get(subscription.id).state == INACTIVE

    def test_make_client_subscription_inactive_without_subscriptions(self, gym):
        client_id = gym.clients.add("99999999")
        with pytest.raises(SubscriptionNotFoundError):
            gym.subscriptions.make_client_subscription_inactive(client_id)

    @pytest.mark.parametrize(
        "method, expected",
        [
            ("make_subscription_inactive", INACTIVE),
            ("make_subscription_suspended", SUSPENDED),
            ("make_subscription_active", ACTIVE),
        ],
    )
    def test_force_state(self, gym, method, expected):
        subscription = gym.enroll()
        gym.subscriptions.make_subscription_inactive(subscription.id)

        result = getattr(gym.subscriptions, method)(subscription.id)

        assert result.state == expected
        assert gym.subscription_store.get(subscription.id).state == expected

    def test_force_state_on_missing_subscription(self, gym):
        with pytest.raises(SubscriptionNotFoundError):
            gym.subscriptions.make_subscription_active(404)

    def test_force_state_with_unseeded_state(self, gym):
        subscription = gym.enroll()
        gym.subscriptions._states = InMemoryStateLookup(states=(ACTIVE,))
        with pytest.raises(StateNotFoundError):
            gym.subscriptions.make_subscription_suspended(subscription.id)


class TestPlanLookups:
    def test_is_active(self, gym):
        subscription = gym.enroll()
        assert gym.subscriptions.is_active(subscription)
        suspended = gym.subscriptions.make_subscription_suspended(subscription.id)
        assert not gym.subscriptions.is_active(suspended)

    def test_attendance_limit(self, gym):
        subscription = gym.enroll(weekly_limit=5)
        limit = gym.subscriptions.get_attendance_limit(subscription.id)
        assert limit == AttendanceLimit(5)
        assert not limit.is_reached_by(4)
        assert limit.is_reached_by(5)

    def test_historical_unit_amount_is_current_plan_price(self, gym):
        subscription = gym.enroll(price="100.00")
        gym.memberships.set_price(subscription.membership.id, "150.00")
        assert gym.subscriptions.get_historical_unit_amount(subscription.id) == Money(
            Decimal("150.00")
        )
