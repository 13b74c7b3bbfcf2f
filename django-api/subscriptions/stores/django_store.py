"""Django ORM implementations of the subscription stores."""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator

from django.db import transaction
from django.db.models import Prefetch

from subscriptions import models
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
from subscriptions.stores.interfaces import (
    AttendanceStore,
    ClientDirectory,
    FeeCollectionStore,
    MembershipCatalog,
    StateLookup,
    SubscriptionStore,
)

SUBSCRIPTION_SCOPE = "subscription"


def to_state(row: models.State) -> State:
    return State(id=row.id, name=row.name, scope=row.scope)


def to_membership(row: models.Membership) -> Membership:
    return Membership(
        id=row.id,
        name=row.name,
        description=row.description,
        monthly_price=Money(amount=row.monthly_price),
        weekly_attendance_limit=AttendanceLimit(value=row.weekly_attendance_limit),
    )


def to_subscription(row: models.Subscription) -> Subscription:
    return Subscription(
        id=row.id,
        client_id=row.client_id,
        start_date=row.start_date,
        state=to_state(row.state),
        membership=to_membership(row.membership),
    )


def to_client(row: models.Client) -> Client:
    return Client(
        id=row.id,
        name=row.name,
        last_name=row.last_name,
        document_number=row.document_number,
        email=row.email,
        subscriptions=tuple(to_subscription(s) for s in row.subscriptions.all()),
    )


def to_fee_collection(row: models.FeeCollection) -> FeeCollection:
    return FeeCollection(
        id=row.id,
        subscription_id=row.subscription_id,
        date=row.date,
        historical_unit_amount=Money(amount=row.historical_unit_amount),
        paid_months=PaidMonths(value=row.paid_months),
    )


def to_attendance(row: models.Attendance) -> Attendance:
    return Attendance(
        id=row.id, subscription_id=row.subscription_id, date_time=row.date_time
    )


class DjangoClientDirectory(ClientDirectory):
    """Client lookups with subscriptions, state and membership prefetched."""

    def _queryset(self):
        return models.Client.objects.prefetch_related(
            Prefetch(
                "subscriptions",
                queryset=models.Subscription.objects.select_related("state", "membership"),
            )
        )

    def find_by_id(self, client_id: int) -> Client:
        try:
            return to_client(self._queryset().get(pk=client_id))
        except models.Client.DoesNotExist:
            raise ClientNotFoundError(client_id) from None

    def find_by_document_number(self, document_number: str) -> Client:
        try:
            return to_client(self._queryset().get(document_number=document_number))
        except models.Client.DoesNotExist:
            raise ClientNotFoundError(document_number) from None


class DjangoMembershipCatalog(MembershipCatalog):
    def find_by_id(self, membership_id: int) -> Membership:
        try:
            return to_membership(models.Membership.objects.get(pk=membership_id))
        except models.Membership.DoesNotExist:
            raise MembershipNotFoundError(membership_id) from None


class DjangoStateLookup(StateLookup):
    def find_by_name(self, name: str) -> State:
        row = models.State.objects.filter(
            scope=SUBSCRIPTION_SCOPE, name__iexact=name
        ).first()
        if row is None:
            raise StateNotFoundError(name)
        return to_state(row)


class DjangoSubscriptionStore(SubscriptionStore):
    """PostgreSQL-backed subscription store using Django ORM."""

    def get(self, subscription_id: int) -> Subscription | None:
        row = (
            models.Subscription.objects.select_related("state", "membership")
            .filter(pk=subscription_id)
            .first()
        )
        return to_subscription(row) if row else None

    def add(
        self, client_id: int, membership_id: int, start_date: date, state: State
    ) -> Subscription:
        row = models.Subscription.objects.create(
            client_id=client_id,
            membership_id=membership_id,
            start_date=start_date,
            state_id=state.id,
        )
        return self.get(row.id)

    def save_state(self, subscription: Subscription) -> Subscription:
        models.Subscription.objects.filter(pk=subscription.id).update(
            state_id=subscription.state.id
        )
        return subscription

    @contextmanager
    def lock(self, subscription_id: int) -> Iterator[None]:
        with transaction.atomic():
            list(
                models.Subscription.objects.select_for_update()
                .filter(pk=subscription_id)
                .values_list("pk", flat=True)
            )
            yield


class DjangoFeeCollectionStore(FeeCollectionStore):
    def list_for_subscription(self, subscription_id: int) -> list[FeeCollection]:
        rows = models.FeeCollection.objects.filter(
            subscription_id=subscription_id
        ).order_by("-date", "-id")
        return [to_fee_collection(row) for row in rows]

    def add(
        self,
        subscription_id: int,
        collected_on: date,
        historical_unit_amount: Money,
        paid_months: PaidMonths,
    ) -> FeeCollection:
        row = models.FeeCollection.objects.create(
            subscription_id=subscription_id,
            date=collected_on,
            historical_unit_amount=historical_unit_amount.amount,
            paid_months=paid_months.value,
        )
        return to_fee_collection(row)


class DjangoAttendanceStore(AttendanceStore):
    def list_for_subscription(self, subscription_id: int) -> list[Attendance]:
        rows = models.Attendance.objects.filter(subscription_id=subscription_id)
        return [to_attendance(row) for row in rows]

    def count_between(
        self, subscription_id: int, start: datetime, end: datetime
    ) -> int:
        return models.Attendance.objects.filter(
            subscription_id=subscription_id,
            date_time__gte=start,
            date_time__lte=end,
        ).count()

    def add(self, subscription_id: int, date_time: datetime) -> Attendance:
        row = models.Attendance.objects.create(
            subscription_id=subscription_id, date_time=date_time
        )
        return to_attendance(row)
