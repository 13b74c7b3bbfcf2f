from subscriptions.domain.models import (
    Attendance,
    Client,
    FeeCollection,
    Membership,
    Outcome,
    State,
    Subscription,
)
from subscriptions.domain.value_objects import (
    AttendanceLimit,
    DocumentNumber,
    Money,
    PaidMonths,
)

__all__ = [
    "Attendance",
    "Client",
    "FeeCollection",
    "Membership",
    "Outcome",
    "State",
    "Subscription",
    "AttendanceLimit",
    "DocumentNumber",
    "Money",
    "PaidMonths",
]
