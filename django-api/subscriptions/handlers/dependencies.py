"""Service wiring for handlers."""

from dataclasses import dataclass

from subscriptions.services import (
    AttendanceService,
    FeeCollectionService,
    FeePaymentStatus,
    SubscriptionService,
)
from subscriptions.stores.django_store import (
    DjangoAttendanceStore,
    DjangoClientDirectory,
    DjangoFeeCollectionStore,
    DjangoMembershipCatalog,
    DjangoStateLookup,
    DjangoSubscriptionStore,
)


@dataclass(frozen=True)
class Services:
    subscriptions: SubscriptionService
    fee_collections: FeeCollectionService
    attendances: AttendanceService


def build_services() -> Services:
    fee_store = DjangoFeeCollectionStore()
    payment_status = FeePaymentStatus(fee_store)
    subscriptions = SubscriptionService(
        store=DjangoSubscriptionStore(),
        clients=DjangoClientDirectory(),
        memberships=DjangoMembershipCatalog(),
        states=DjangoStateLookup(),
        payment_status=payment_status,
    )
    return Services(
        subscriptions=subscriptions,
        fee_collections=FeeCollectionService(fee_store, subscriptions, payment_status),
        attendances=AttendanceService(DjangoAttendanceStore(), subscriptions),
    )
