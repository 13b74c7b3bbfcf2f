from subscriptions.handlers.views import (
    AttendanceCreateView,
    ClientSubscriptionCreateView,
    ClientSubscriptionInactivateView,
    CurrentSubscriptionView,
    FeeCollectionCreateView,
    SubscriptionAttendanceListView,
    SubscriptionDetailView,
    SubscriptionFeeCollectionListView,
    SubscriptionPaymentStatusView,
    SubscriptionStateView,
)

__all__ = [
    "AttendanceCreateView",
    "ClientSubscriptionCreateView",
    "ClientSubscriptionInactivateView",
    "CurrentSubscriptionView",
    "FeeCollectionCreateView",
    "SubscriptionAttendanceListView",
    "SubscriptionDetailView",
    "SubscriptionFeeCollectionListView",
    "SubscriptionPaymentStatusView",
    "SubscriptionStateView",
]
