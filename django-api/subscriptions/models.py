"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


def utc_today():
    return timezone.now().date()


class State(models.Model):
    """Persistence model for named lifecycle states."""

    scope = models.CharField(max_length=50, default="subscription")
    name = models.CharField(max_length=50)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["scope", "name"], name="unique_state_per_scope"),
        ]

    def __str__(self) -> str:
        return self.name


class Membership(models.Model):
    """Persistence model for membership plans."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)
    monthly_price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    weekly_attendance_limit = models.PositiveIntegerField(
        validators=[MinValueValidator(1)]
    )

    def __str__(self) -> str:
        return self.name


class Client(models.Model):
    """Persistence model for gym clients."""

    name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    document_number = models.CharField(max_length=30, unique=True)
    email = models.EmailField(unique=True)
    phone_number = models.CharField(max_length=30, blank=True, null=True)
    registration_date = models.DateField(default=utc_today)

    def __str__(self) -> str:
        return f"{self.last_name}, {self.name} ({self.document_number})"


class Subscription(models.Model):
    """Persistence model for client subscriptions."""

    client = models.ForeignKey(
        Client, on_delete=models.CASCADE, related_name="subscriptions"
    )
    membership = models.ForeignKey(
        Membership, on_delete=models.PROTECT, related_name="subscriptions"
    )
    state = models.ForeignKey(State, on_delete=models.PROTECT, related_name="+")
    start_date = models.DateField(default=utc_today)

    class Meta:
        ordering = ["-start_date", "-id"]
        indexes = [
            models.Index(
                fields=["client", "-start_date"], name="subscription_client_start_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.client} - {self.membership} since {self.start_date}"


class FeeCollection(models.Model):
    """Persistence model for fee collections.

    historical_unit_amount is written once, at creation.
    """

    subscription = models.ForeignKey(
        Subscription, on_delete=models.CASCADE, related_name="fee_collections"
    )
    date = models.DateField(default=utc_today)
    historical_unit_amount = models.DecimalField(max_digits=10, decimal_places=2)
    paid_months = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(
                fields=["subscription", "-date"], name="feecollection_sub_date_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.subscription_id} - {self.date} x{self.paid_months}"


class Attendance(models.Model):
    """Persistence model for attendances."""

    subscription = models.ForeignKey(
        Subscription, on_delete=models.CASCADE, related_name="attendances"
    )
    date_time = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-date_time"]
        indexes = [
            models.Index(
                fields=["subscription", "date_time"], name="attendance_sub_time_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.subscription_id} - {self.date_time}"
