"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in subscriptions/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from dateutil.relativedelta import relativedelta

from subscriptions.domain.value_objects import AttendanceLimit, Money, PaidMonths


@dataclass(frozen=True)
class State:
    """Domain representation of a named lifecycle state."""

    id: int
    name: str
    scope: str = "subscription"


@dataclass(frozen=True)
class Membership:
    """Domain representation of a membership plan."""

    id: int
    name: str
    monthly_price: Money
    weekly_attendance_limit: AttendanceLimit
    description: str | None = None


@dataclass(frozen=True)
class Subscription:
    """Domain representation of a client's enrollment in a plan."""

    id: int
    client_id: int
    start_date: date
    state: State
    membership: Membership


@dataclass(frozen=True)
class Client:
    """Domain representation of a Client with its subscription history."""

    id: int
    name: str
    last_name: str
    document_number: str
    email: str
    subscriptions: tuple[Subscription, ...] = ()


@dataclass(frozen=True)
class FeeCollection:
    """A recorded payment with the plan price frozen at record time."""

    id: int
    subscription_id: int
    date: date
    historical_unit_amount: Money
    paid_months: PaidMonths

    @property
    def due_date(self) -> date:
        return self.date + relativedelta(months=self.paid_months.value)

    @property
    def total_amount(self) -> Money:
        return self.historical_unit_amount * self.paid_months.value


@dataclass(frozen=True)
class Attendance:
    """A single recorded visit."""

    id: int
    subscription_id: int
    date_time: datetime


@dataclass(frozen=True)
class Outcome:
    """Result of a domain rule check that callers branch on."""

    success: bool
    message: str | None = None
    value: Any = field(default=None, compare=False)

    @classmethod
    def ok(cls, value: Any = None) -> "Outcome":
        return cls(success=True, value=value)

    @classmethod
    def denied(cls, message: str) -> "Outcome":
        return cls(success=False, message=message)


NO_ACTIVE_SUBSCRIPTION = "No active subscription found"
INACTIVE_SUBSCRIPTION = "Inactive subscription"
ATTENDANCE_LIMIT_EXCEEDED = "Attendance limit exceeded"
