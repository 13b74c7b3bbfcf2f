"""Serializers for request input and domain model responses."""

from rest_framework import serializers

from subscriptions.domain.lifecycle import StateName


class StateSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()


class MembershipSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    monthly_price = serializers.DecimalField(
        source="monthly_price.amount", max_digits=10, decimal_places=2
    )
    weekly_attendance_limit = serializers.IntegerField(
        source="weekly_attendance_limit.value"
    )


class SubscriptionSerializer(serializers.Serializer):
    """Serializer for Subscription domain model."""

    id = serializers.IntegerField()
    client_id = serializers.IntegerField()
    start_date = serializers.DateField()
    state = StateSerializer()
    membership = MembershipSerializer()


class FeeCollectionSerializer(serializers.Serializer):
    """Serializer for FeeCollection domain model."""

    id = serializers.IntegerField()
    subscription_id = serializers.IntegerField()
    date = serializers.DateField()
    historical_unit_amount = serializers.DecimalField(
        source="historical_unit_amount.amount", max_digits=10, decimal_places=2
    )
    paid_months = serializers.IntegerField(source="paid_months.value")
    total_amount = serializers.DecimalField(
        source="total_amount.amount", max_digits=12, decimal_places=2
    )
    due_date = serializers.DateField()


class PaymentStatusSerializer(serializers.Serializer):
    up_to_date = serializers.BooleanField()
    due_date = serializers.DateField(allow_null=True)


class AttendanceSerializer(serializers.Serializer):
    """Serializer for Attendance domain model."""

    id = serializers.IntegerField()
    subscription_id = serializers.IntegerField()
    date_time = serializers.DateTimeField()


class SubscriptionCreateSerializer(serializers.Serializer):
    membership_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField(required=False)


class CaseInsensitiveChoiceField(serializers.ChoiceField):
    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.lower()
        return super().to_internal_value(data)


class StateChangeSerializer(serializers.Serializer):
    state = CaseInsensitiveChoiceField(choices=[name.value.lower() for name in StateName])


class CurrentSubscriptionQuerySerializer(serializers.Serializer):
    document_number = serializers.CharField(required=False)
    client_id = serializers.IntegerField(required=False, min_value=1)


class AttendanceCreateSerializer(serializers.Serializer):
    document_number = serializers.CharField()


class FeeCollectionCreateSerializer(serializers.Serializer):
    document_number = serializers.CharField()
    paid_months = serializers.IntegerField(min_value=1)
    date = serializers.DateField(required=False)
