"""Pure lifecycle rules for subscriptions.

Nothing here touches storage; services feed in what they loaded and decide
what to persist from the result.
"""

from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, time, timedelta
from enum import Enum
from typing import Iterable

from subscriptions.domain.models import FeeCollection, State, Subscription


class StateName(Enum):
    """Seeded lifecycle state names."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"

    def matches(self, state: State) -> bool:
        return state.name.lower() == self.value.lower()


@dataclass(frozen=True)
class ReconcileResult:
    """Subscription after reconciliation and whether it differs from the input."""

    subscription: Subscription
    changed: bool


def select_current(subscriptions: Iterable[Subscription]) -> Subscription | None:
    """Return the subscription with the latest start date, highest id on ties."""
    return max(subscriptions, key=lambda s: (s.start_date, s.id), default=None)


def transition(subscription: Subscription, target: State) -> ReconcileResult:
    if subscription.state.name.lower() == target.name.lower():
        return ReconcileResult(subscription=subscription, changed=False)
    return ReconcileResult(subscription=replace(subscription, state=target), changed=True)


def reconcile(
    subscription: Subscription, payment_current: bool, suspended_state: State
) -> ReconcileResult:
    """Suspend an active or suspended subscription whose payment is stale.

    Inactive subscriptions are left alone; only an explicit call or a new
    fee collection moves them.
    """
    if payment_current or StateName.INACTIVE.matches(subscription.state):
        return ReconcileResult(subscription=subscription, changed=False)
    return transition(subscription, suspended_state)


def latest_fee_collection(
    fee_collections: Iterable[FeeCollection],
) -> FeeCollection | None:
    return max(fee_collections, key=lambda f: (f.date, f.id), default=None)


def as_utc_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def is_payment_current(
    fee_collections: Iterable[FeeCollection], now: datetime
) -> bool:
    """True while `now` is strictly before the latest payment's due date."""
    latest = latest_fee_collection(fee_collections)
    if latest is None:
        return False
    return now < as_utc_midnight(latest.due_date)


def week_window(now: datetime) -> tuple[datetime, datetime]:
    """Return the Sunday 00:00 to Saturday 23:59:59.999999 UTC week containing `now`."""
    now = now.astimezone(UTC)
    days_since_sunday = (now.weekday() + 1) % 7
    start = as_utc_midnight(now.date() - timedelta(days=days_since_sunday))
    end = start + timedelta(days=7) - timedelta(microseconds=1)
    return start, end


def utc_now() -> datetime:
    return datetime.now(UTC)
