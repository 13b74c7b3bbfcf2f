from subscriptions.stores.interfaces import (
    AttendanceStore,
    ClientDirectory,
    FeeCollectionStore,
    MembershipCatalog,
    PaymentStatusProvider,
    StateLookup,
    SubscriptionStore,
)

__all__ = [
    "AttendanceStore",
    "ClientDirectory",
    "FeeCollectionStore",
    "MembershipCatalog",
    "PaymentStatusProvider",
    "StateLookup",
    "SubscriptionStore",
]
