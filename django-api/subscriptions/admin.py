from django.contrib import admin

from subscriptions.models import (
    Attendance,
    Client,
    FeeCollection,
    Membership,
    State,
    Subscription,
)


class SubscriptionInline(admin.TabularInline):
    model = Subscription
    extra = 0


class FeeCollectionInline(admin.TabularInline):
    model = FeeCollection
    extra = 0
    readonly_fields = ["historical_unit_amount"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(State)
class StateAdmin(admin.ModelAdmin):
    list_display = ["name", "scope"]


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ["name", "monthly_price", "weekly_attendance_limit"]
    search_fields = ["name"]


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ["document_number", "last_name", "name", "email"]
    search_fields = ["document_number", "last_name", "email"]
    inlines = [SubscriptionInline]


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ["client", "membership", "state", "start_date"]
    list_filter = ["state", "membership"]
    inlines = [FeeCollectionInline]


@admin.register(FeeCollection)
class FeeCollectionAdmin(admin.ModelAdmin):
    list_display = ["subscription", "date", "historical_unit_amount", "paid_months"]
    list_filter = ["subscription__membership"]
    readonly_fields = ["historical_unit_amount"]

    def has_add_permission(self, request):
        return False


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ["subscription", "date_time"]
    list_filter = ["subscription__membership"]
