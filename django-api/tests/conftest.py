"""Pytest configuration and shared fixtures."""

from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from decimal import Decimal
from itertools import count

import pytest
from rest_framework.test import APIClient

from subscriptions.domain import (
    Attendance,
    AttendanceLimit,
    Client,
    FeeCollection,
    Membership,
    Money,
    PaidMonths,
    State,
    Subscription,
)
from subscriptions.domain.errors import (
    ClientNotFoundError,
    MembershipNotFoundError,
    StateNotFoundError,
)
from subscriptions.services import (
    AttendanceService,
    FeeCollectionService,
    FeePaymentStatus,
    SubscriptionService,
)
from subscriptions.stores.interfaces import (
    AttendanceStore,
    ClientDirectory,
    FeeCollectionStore,
    MembershipCatalog,
    StateLookup,
    SubscriptionStore,
)

ACTIVE = State(id=1, name="Active")
INACTIVE = State(id=2, name="Inactive")
SUSPENDED = State(id=3, name="Suspended")

# Saturday
NOW = datetime(2025, 8, 30, 3, 22, 25, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryStateLookup(StateLookup):
    def __init__(self, states=(ACTIVE, INACTIVE, SUSPENDED)) -> None:
        self._states = list(states)

    def find_by_name(self, name: str) -> State:
        for state in self._states:
            if state.name.lower() == name.lower():
                return state
        raise StateNotFoundError(name)


class InMemoryMembershipCatalog(MembershipCatalog):
    def __init__(self) -> None:
        self._plans: dict[int, Membership] = {}
        self._ids = count(1)

    def add(self, price: str = "100.00", weekly_limit: int = 3) -> Membership:
        plan = Membership(
            id=next(self._ids),
            name=f"Plan {len(self._plans) + 1}",
            monthly_price=Money(Decimal(price)),
            weekly_attendance_limit=AttendanceLimit(weekly_limit),
        )
        self._plans[plan.id] = plan
        return plan

    def set_price(self, membership_id: int, price: str) -> None:
        self._plans[membership_id] = replace(
            self._plans[membership_id], monthly_price=Money(Decimal(price))
        )

    def find_by_id(self, membership_id: int) -> Membership:
        try:
            return self._plans[membership_id]
        except KeyError:
            raise MembershipNotFoundError(membership_id) from None


@dataclass
class SubscriptionRow:
    id: int
    client_id: int
    membership_id: int
    start_date: date
    state: State


class InMemorySubscriptionStore(SubscriptionStore):
    def __init__(self, memberships: InMemoryMembershipCatalog) -> None:
        self._memberships = memberships
        self._rows: dict[int, SubscriptionRow] = {}
        self._ids = count(1)
        self.state_writes = 0
        self.locked_ids: list[int] = []

    def _build(self, row: SubscriptionRow) -> Subscription:
        return Subscription(
            id=row.id,
            client_id=row.client_id,
            start_date=row.start_date,
            state=row.state,
            membership=self._memberships.find_by_id(row.membership_id),
        )

    def get(self, subscription_id: int) -> Subscription | None:
        row = self._rows.get(subscription_id)
        return self._build(row) if row else None

    def add(self, client_id, membership_id, start_date, state) -> Subscription:
        row = SubscriptionRow(next(self._ids), client_id, membership_id, start_date, state)
        self._rows[row.id] = row
        return self._build(row)

    def save_state(self, subscription: Subscription) -> Subscription:
        self._rows[subscription.id].state = subscription.state
        self.state_writes += 1
        return subscription

    @contextmanager
    def lock(self, subscription_id: int):
        self.locked_ids.append(subscription_id)
        yield

    def for_client(self, client_id: int) -> tuple[Subscription, ...]:
        return tuple(
            self._build(row) for row in self._rows.values() if row.client_id == client_id
        )


class InMemoryClientDirectory(ClientDirectory):
    def __init__(self, subscriptions: InMemorySubscriptionStore) -> None:
        self._subscriptions = subscriptions
        self._clients: dict[int, tuple[str, str]] = {}
        self._ids = count(1)

    def add(self, document_number: str) -> int:
        client_id = next(self._ids)
        self._clients[client_id] = (document_number, f"{document_number}@example.com")
        return client_id

    def _build(self, client_id: int) -> Client:
        document_number, email = self._clients[client_id]
        return Client(
            id=client_id,
            name="Test",
            last_name="Client",
            document_number=document_number,
            email=email,
            subscriptions=self._subscriptions.for_client(client_id),
        )

    def find_by_id(self, client_id: int) -> Client:
        if client_id not in self._clients:
            raise ClientNotFoundError(client_id)
        return self._build(client_id)

    def find_by_document_number(self, document_number: str) -> Client:
        for client_id, (doc, _) in self._clients.items():
            if doc == document_number:
                return self._build(client_id)
        raise ClientNotFoundError(document_number)


class InMemoryFeeCollectionStore(FeeCollectionStore):
    def __init__(self) -> None:
        self.rows: list[FeeCollection] = []
        self._ids = count(1)

    def list_for_subscription(self, subscription_id: int) -> list[FeeCollection]:
        rows = [r for r in self.rows if r.subscription_id == subscription_id]
        return sorted(rows, key=lambda r: (r.date, r.id), reverse=True)

    def add(self, subscription_id, collected_on, historical_unit_amount, paid_months):
        row = FeeCollection(
            id=next(self._ids),
            subscription_id=subscription_id,
            date=collected_on,
            historical_unit_amount=historical_unit_amount,
            paid_months=paid_months,
        )
        self.rows.append(row)
        return row


class InMemoryAttendanceStore(AttendanceStore):
    def __init__(self) -> None:
        self.rows: list[Attendance] = []
        self._ids = count(1)

    def list_for_subscription(self, subscription_id: int) -> list[Attendance]:
        rows = [r for r in self.rows if r.subscription_id == subscription_id]
        return sorted(rows, key=lambda r: r.date_time, reverse=True)

    def count_between(self, subscription_id, start, end) -> int:
        return sum(
            1
            for r in self.rows
            if r.subscription_id == subscription_id and start <= r.date_time <= end
        )

    def add(self, subscription_id, date_time) -> Attendance:
        row = Attendance(id=next(self._ids), subscription_id=subscription_id, date_time=date_time)
        self.rows.append(row)
        return row


class Gym:
    """In-memory wiring of all services over fake stores."""

    def __init__(self, store_factory=InMemorySubscriptionStore) -> None:
        self.clock = FakeClock()
        self.states = InMemoryStateLookup()
        self.memberships = InMemoryMembershipCatalog()
        self.subscription_store = store_factory(self.memberships)
        self.clients = InMemoryClientDirectory(self.subscription_store)
        self.fee_store = InMemoryFeeCollectionStore()
        self.attendance_store = InMemoryAttendanceStore()
        self.payment_status = FeePaymentStatus(self.fee_store, clock=self.clock)
        self.subscriptions = SubscriptionService(
            store=self.subscription_store,
            clients=self.clients,
            memberships=self.memberships,
            states=self.states,
            payment_status=self.payment_status,
            clock=self.clock,
        )
        self.fee_collections = FeeCollectionService(
            self.fee_store, self.subscriptions, self.payment_status, clock=self.clock
        )
        self.attendances = AttendanceService(
            self.attendance_store, self.subscriptions, clock=self.clock
        )

    def enroll(
        self,
        document_number: str = "12345678",
        start_date: date = date(2025, 8, 1),
        weekly_limit: int = 3,
        price: str = "100.00",
    ) -> Subscription:
        """Create a client with one Active subscription and no payments."""
        client_id = self.clients.add(document_number)
        plan = self.memberships.add(price=price, weekly_limit=weekly_limit)
        return self.subscriptions.create(plan.id, client_id, start_date)

    def pay(self, subscription: Subscription, on: date, months: int = 1) -> FeeCollection:
        return self.fee_store.add(
            subscription.id, on, subscription.membership.monthly_price, PaidMonths(months)
        )


@pytest.fixture
def gym() -> Gym:
    return Gym()


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()
