"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, datetime

from subscriptions.domain import (
    Attendance,
    Client,
    FeeCollection,
    Membership,
    Money,
    PaidMonths,
    State,
    Subscription,
)
from subscriptions.domain.lifecycle import StateName


class ClientDirectory(ABC):
    """Interface for client lookups, subscriptions included."""

    @abstractmethod
    def find_by_id(self, client_id: int) -> Client:
        """Return a client by ID.

        Raises:
            ClientNotFoundError: If the client does not exist.
        """
        ...

    @abstractmethod
    def find_by_document_number(self, document_number: str) -> Client:
        """Return a client by document number.

        Raises:
            ClientNotFoundError: If the client does not exist.
        """
        ...


class MembershipCatalog(ABC):
    """Interface for membership plan lookups."""

    @abstractmethod
    def find_by_id(self, membership_id: int) -> Membership:
        """Return a plan by ID.

        Raises:
            MembershipNotFoundError: If the plan does not exist.
        """
        ...


class StateLookup(ABC):
    """Interface for resolving and classifying lifecycle states."""

    @abstractmethod
    def find_by_name(self, name: str) -> State:
        """Return a state by case-insensitive name.

        Raises:
            StateNotFoundError: If no such state is seeded.
        """
        ...

    def find_active_state(self) -> State:
        return self.find_by_name(StateName.ACTIVE.value)

    def find_inactive_state(self) -> State:
        return self.find_by_name(StateName.INACTIVE.value)

    def find_suspended_state(self) -> State:
        return self.find_by_name(StateName.SUSPENDED.value)

    def is_active(self, state: State) -> bool:
        return StateName.ACTIVE.matches(state)

    def is_inactive(self, state: State) -> bool:
        return StateName.INACTIVE.matches(state)


class SubscriptionStore(ABC):
    """Interface for subscription persistence operations."""

    @abstractmethod
    def get(self, subscription_id: int) -> Subscription | None:
        """Return a subscription with state and membership, or None if not found."""
        ...

    @abstractmethod
    def add(
        self, client_id: int, membership_id: int, start_date: date, state: State
    ) -> Subscription:
        """Persist a new subscription and return it."""
        ...

    @abstractmethod
    def save_state(self, subscription: Subscription) -> Subscription:
        """Persist the subscription's state reference and return it."""
        ...

    @abstractmethod
    def lock(self, subscription_id: int) -> AbstractContextManager[None]:
        """Serialize work on one subscription for the duration of the block."""
        ...


class FeeCollectionStore(ABC):
    """Interface for fee collection persistence operations."""

    @abstractmethod
    def list_for_subscription(self, subscription_id: int) -> list[FeeCollection]:
        """Return fee collections ordered by date descending, then id descending."""
        ...

    @abstractmethod
    def add(
        self,
        subscription_id: int,
        collected_on: date,
        historical_unit_amount: Money,
        paid_months: PaidMonths,
    ) -> FeeCollection:
        """Persist a new fee collection and return it."""
        ...


class AttendanceStore(ABC):
    """Interface for attendance persistence operations."""

    @abstractmethod
    def list_for_subscription(self, subscription_id: int) -> list[Attendance]:
        """Return attendances ordered by date_time descending."""
        ...

    @abstractmethod
    def count_between(
        self, subscription_id: int, start: datetime, end: datetime
    ) -> int:
        """Count attendances with start <= date_time <= end."""
        ...

    @abstractmethod
    def add(self, subscription_id: int, date_time: datetime) -> Attendance:
        """Persist a new attendance and return it."""
        ...


class PaymentStatusProvider(ABC):
    """Answers whether a subscription's payment is current."""

    @abstractmethod
    def validate_up_to_date_payment(
        self, subscription_id: int, now: datetime | None = None
    ) -> bool:
        ...
