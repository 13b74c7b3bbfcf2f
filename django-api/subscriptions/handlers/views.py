"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from subscriptions.domain import Outcome
from subscriptions.domain.errors import DomainError, NotFoundError
from subscriptions.domain.lifecycle import StateName
from subscriptions.handlers import serializers
from subscriptions.handlers.dependencies import build_services

logger = logging.getLogger(__name__)


def error_response(error: DomainError) -> Response:
    if isinstance(error, NotFoundError):
        logger.debug("Lookup failed: %s", error)
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({"code": error.code.value, "message": error.message}, status=code)


def denied_response(outcome: Outcome) -> Response:
    return Response(
        {"success": False, "message": outcome.message},
        status=status.HTTP_409_CONFLICT,
    )


class ServiceView(APIView):
    """Base view that wires services and maps domain errors."""

    def initial(self, request: Request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        self.services = build_services()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


class ClientSubscriptionCreateView(ServiceView):
    """Handler for POST /api/clients/{client_id}/subscriptions"""

    def post(self, request: Request, client_id: int) -> Response:
        payload = serializers.SubscriptionCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        subscription = self.services.subscriptions.create(
            membership_id=payload.validated_data["membership_id"],
            client_id=client_id,
            start_date=payload.validated_data.get("start_date"),
        )
        return Response(
            serializers.SubscriptionSerializer(subscription).data,
            status=status.HTTP_201_CREATED,
        )


class ClientSubscriptionInactivateView(ServiceView):
    """Handler for POST /api/clients/{client_id}/subscriptions/inactivate"""

    def post(self, request: Request, client_id: int) -> Response:
        subscription = self.services.subscriptions.make_client_subscription_inactive(
            client_id
        )
        return Response(serializers.SubscriptionSerializer(subscription).data)


class CurrentSubscriptionView(ServiceView):
    """Handler for GET /api/clients/current-subscription"""

    def get(self, request: Request) -> Response:
        query = serializers.CurrentSubscriptionQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        subscription = self.services.subscriptions.get_current_subscription(
            document_number=query.validated_data.get("document_number"),
            client_id=query.validated_data.get("client_id"),
        )
        if subscription is None:
            return Response(
                {"detail": "document_number or client_id is required"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(serializers.SubscriptionSerializer(subscription).data)


class SubscriptionDetailView(ServiceView):
    """Handler for GET /api/subscriptions/{subscription_id}"""

    def get(self, request: Request, subscription_id: int) -> Response:
        subscription = self.services.subscriptions.find_by_id(subscription_id)
        return Response(serializers.SubscriptionSerializer(subscription).data)


class SubscriptionStateView(ServiceView):
    """Handler for POST /api/subscriptions/{subscription_id}/state"""

    def post(self, request: Request, subscription_id: int) -> Response:
        payload = serializers.StateChangeSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        subscriptions = self.services.subscriptions
        transitions = {
            StateName.ACTIVE.value.lower(): subscriptions.make_subscription_active,
            StateName.INACTIVE.value.lower(): subscriptions.make_subscription_inactive,
            StateName.SUSPENDED.value.lower(): subscriptions.make_subscription_suspended,
        }
        subscription = transitions[payload.validated_data["state"]](subscription_id)
        return Response(serializers.SubscriptionSerializer(subscription).data)


class SubscriptionAttendanceListView(ServiceView):
    """Handler for GET /api/subscriptions/{subscription_id}/attendances"""

    def get(self, request: Request, subscription_id: int) -> Response:
        attendances = self.services.attendances.list_for_subscription(subscription_id)
        return Response(serializers.AttendanceSerializer(attendances, many=True).data)


class SubscriptionFeeCollectionListView(ServiceView):
    """Handler for GET /api/subscriptions/{subscription_id}/fee-collections"""

    def get(self, request: Request, subscription_id: int) -> Response:
        fee_collections = self.services.fee_collections.list_for_subscription(
            subscription_id
        )
        return Response(
            serializers.FeeCollectionSerializer(fee_collections, many=True).data
        )


class SubscriptionPaymentStatusView(ServiceView):
    """Handler for GET /api/subscriptions/{subscription_id}/payment-status"""

    def get(self, request: Request, subscription_id: int) -> Response:
        fee_collections = self.services.fee_collections
        due_date = fee_collections.get_due_date(subscription_id)
        status_data = {
            "up_to_date": fee_collections.validate_up_to_date_payment(subscription_id),
            "due_date": due_date,
        }
        return Response(serializers.PaymentStatusSerializer(status_data).data)


class AttendanceCreateView(ServiceView):
    """Handler for POST /api/attendances"""

    def post(self, request: Request) -> Response:
        payload = serializers.AttendanceCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        outcome = self.services.attendances.create(
            payload.validated_data["document_number"]
        )
        if not outcome.success:
            return denied_response(outcome)
        return Response({"success": True}, status=status.HTTP_201_CREATED)


class FeeCollectionCreateView(ServiceView):
    """Handler for POST /api/fee-collections"""

    def post(self, request: Request) -> Response:
        payload = serializers.FeeCollectionCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        outcome = self.services.fee_collections.create(
            document_number=payload.validated_data["document_number"],
            paid_months=payload.validated_data["paid_months"],
            collected_on=payload.validated_data.get("date"),
        )
        if not outcome.success:
            return denied_response(outcome)
        return Response(
            serializers.FeeCollectionSerializer(outcome.value).data,
            status=status.HTTP_201_CREATED,
        )
