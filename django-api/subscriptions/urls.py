from django.urls import path

from subscriptions.handlers import (
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

urlpatterns = [
    path(
        "clients/current-subscription",
        CurrentSubscriptionView.as_view(),
        name="current-subscription",
    ),
    path(
        "clients/<int:client_id>/subscriptions",
        ClientSubscriptionCreateView.as_view(),
        name="client-subscription-create",
    ),
    path(
        "clients/<int:client_id>/subscriptions/inactivate",
        ClientSubscriptionInactivateView.as_view(),
        name="client-subscription-inactivate",
    ),
    path(
        "subscriptions/<int:subscription_id>",
        SubscriptionDetailView.as_view(),
        name="subscription-detail",
    ),
    path(
        "subscriptions/<int:subscription_id>/state",
        SubscriptionStateView.as_view(),
        name="subscription-state",
    ),
    path(
        "subscriptions/<int:subscription_id>/attendances",
        SubscriptionAttendanceListView.as_view(),
        name="subscription-attendances",
    ),
    path(
        "subscriptions/<int:subscription_id>/fee-collections",
        SubscriptionFeeCollectionListView.as_view(),
        name="subscription-fee-collections",
    ),
    path(
        "subscriptions/<int:subscription_id>/payment-status",
        SubscriptionPaymentStatusView.as_view(),
        name="subscription-payment-status",
    ),
    path("attendances", AttendanceCreateView.as_view(), name="attendance-create"),
    path(
        "fee-collections", FeeCollectionCreateView.as_view(), name="fee-collection-create"
    ),
]
