from subscriptions.services.attendance_service import AttendanceService
from subscriptions.services.fee_collection_service import (
    FeeCollectionService,
    FeePaymentStatus,
)
from subscriptions.services.subscription_service import SubscriptionService

__all__ = [
    "AttendanceService",
    "FeeCollectionService",
    "FeePaymentStatus",
    "SubscriptionService",
]
