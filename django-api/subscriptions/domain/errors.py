"""Domain error codes for the subscriptions module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
    SUBSCRIPTION_NOT_FOUND = "SUBSCRIPTION_NOT_FOUND"
    MEMBERSHIP_NOT_FOUND = "MEMBERSHIP_NOT_FOUND"
    STATE_NOT_FOUND = "STATE_NOT_FOUND"
    INVALID_SUBSCRIPTION = "INVALID_SUBSCRIPTION"
    INVALID_FEE_COLLECTION = "INVALID_FEE_COLLECTION"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """Base for lookups by identifier that resolved nothing."""


class ClientNotFoundError(NotFoundError):
    """Raised when a client is not found by id or document number."""

    def __init__(self, identifier: str | int) -> None:
        super().__init__(
            code=ErrorCode.CLIENT_NOT_FOUND,
            message="Client not found",
        )
        object.__setattr__(self, "identifier", identifier)


class SubscriptionNotFoundError(NotFoundError):
    """Raised when a subscription is not found, or a client has none."""

    def __init__(self, identifier: str | int) -> None:
        super().__init__(
            code=ErrorCode.SUBSCRIPTION_NOT_FOUND,
            message="Subscription not found",
        )
        object.__setattr__(self, "identifier", identifier)


class MembershipNotFoundError(NotFoundError):
    """Raised when a membership plan is not found."""

    def __init__(self, membership_id: int) -> None:
        super().__init__(
            code=ErrorCode.MEMBERSHIP_NOT_FOUND,
            message="Membership not found",
        )
        object.__setattr__(self, "membership_id", membership_id)


class StateNotFoundError(NotFoundError):
    """Raised when a named lifecycle state is not seeded."""

    def __init__(self, name: str) -> None:
        super().__init__(
            code=ErrorCode.STATE_NOT_FOUND,
            message=f"State {name} not found",
        )
        object.__setattr__(self, "name", name)


class InvalidSubscriptionError(DomainError):
    """Raised when subscription input breaks a domain rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SUBSCRIPTION, message=message)


class InvalidFeeCollectionError(DomainError):
    """Raised when fee collection input breaks a domain rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_FEE_COLLECTION, message=message)
