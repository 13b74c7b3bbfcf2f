"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __mul__(self, factor: int) -> "Money":
        return Money(amount=self.amount * factor)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class PaidMonths:
    """Number of months a single payment covers."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Paid months must be at least 1")


@dataclass(frozen=True)
class AttendanceLimit:
    """Maximum attendances allowed per calendar week."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Weekly attendance limit must be at least 1")

    def is_reached_by(self, count: int) -> bool:
        return count >= self.value


@dataclass(frozen=True)
class DocumentNumber:
    """Client identity document number."""

    value: str

    def __post_init__(self) -> None:
        stripped = self.value.strip()
        if not stripped:
            raise ValueError("Document number cannot be blank")
        object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        return self.value
