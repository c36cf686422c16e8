# backend/modules/employees/domain/value_objects.py

from dataclasses import dataclass
from decimal import Decimal

from core.values import AmountLike, Email, require_text, to_amount

__all__ = ["Email", "FullName", "Position", "Salary"]

MAX_POSITION_LENGTH = 100
MAX_NAME_LENGTH = 100


@dataclass(frozen=True, slots=True)
class FullName:
    first_name: str
    last_name: str

    def __post_init__(self) -> None:
        first = require_text(self.first_name, "First name cannot be empty")
        last = require_text(self.last_name, "Last name cannot be empty")
        if len(first) > MAX_NAME_LENGTH or len(last) > MAX_NAME_LENGTH:
            raise ValueError(f"Names cannot exceed {MAX_NAME_LENGTH} characters")
        object.__setattr__(self, "first_name", first)
        object.__setattr__(self, "last_name", last)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True, slots=True)
class Position:
    title: str

    def __post_init__(self) -> None:
        title = require_text(self.title, "Position cannot be empty")
        if len(title) > MAX_POSITION_LENGTH:
            raise ValueError(
                f"Position cannot exceed {MAX_POSITION_LENGTH} characters"
            )
        object.__setattr__(self, "title", title)

    def __str__(self) -> str:
        return self.title


@dataclass(frozen=True, slots=True)
class Salary:
    """Annual salary. Any ISO 4217 style three letter code is accepted."""

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        amount = to_amount(self.amount)
        if amount <= 0:
            raise ValueError("Salary amount must be positive")
        currency = (self.currency or "").strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    @classmethod
    def of(cls, amount: AmountLike, currency: str = "USD") -> "Salary":
        return cls(to_amount(amount), currency)

    def is_greater_than(self, other: "Salary") -> bool:
        if self.currency != other.currency:
            raise ValueError("Cannot compare salaries with different currencies")
        return self.amount > other.amount

    def monthly(self) -> Decimal:
        return to_amount(self.amount / 12)

    def format(self) -> str:
        return f"{self.amount:,.2f} {self.currency}"

    def __str__(self) -> str:
        return self.format()
