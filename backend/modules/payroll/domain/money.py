# backend/modules/payroll/domain/money.py

"""
Money value objects used by payroll calculations.

All amounts are Decimals rounded to cents. Arithmetic between two values
requires the same currency and returns a new value object.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping

from core.values import AmountLike, to_amount

SUPPORTED_CURRENCIES = frozenset({"USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY"})

ZERO = Decimal("0.00")


def validate_currency(currency: str) -> str:
    code = (currency or "").strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValueError(f"Invalid currency: {currency}")
    return code


def _ensure_same_currency(action: str, left: str, right: str) -> None:
    if left != right:
        raise ValueError(f"Cannot {action} different currencies: {left} and {right}")


@dataclass(frozen=True, slots=True)
class GrossSalary:
    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        amount = to_amount(self.amount)
        if amount <= 0:
            raise ValueError("Gross salary must be positive")
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", validate_currency(self.currency))

    def add(self, other: "GrossSalary") -> "GrossSalary":
        _ensure_same_currency("add", self.currency, other.currency)
        return GrossSalary(self.amount + other.amount, self.currency)

    def subtract(self, other: "GrossSalary") -> "GrossSalary":
        _ensure_same_currency("subtract", self.currency, other.currency)
        return GrossSalary(self.amount - other.amount, self.currency)

    def multiply(self, multiplier: AmountLike) -> "GrossSalary":
        factor = Decimal(str(multiplier))
        if factor <= 0:
            raise ValueError("Multiplier must be positive")
        return GrossSalary(self.amount * factor, self.currency)

    def is_greater_than(self, other: "GrossSalary") -> bool:
        _ensure_same_currency("compare", self.currency, other.currency)
        return self.amount > other.amount

    def is_less_than(self, other: "GrossSalary") -> bool:
        _ensure_same_currency("compare", self.currency, other.currency)
        return self.amount < other.amount

    def format(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True, slots=True)
class NetSalary:
    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        amount = to_amount(self.amount)
        if amount <= 0:
            raise ValueError("Net salary must be positive")
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", validate_currency(self.currency))

    def is_greater_than(self, other: "NetSalary") -> bool:
        _ensure_same_currency("compare", self.currency, other.currency)
        return self.amount > other.amount

    def format(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True, slots=True)
class Deductions:
    taxes: Decimal = ZERO
    social_security: Decimal = ZERO
    health_insurance: Decimal = ZERO
    currency: str = "USD"

    def __post_init__(self) -> None:
        for name, label in (
            ("taxes", "Taxes"),
            ("social_security", "Social security"),
            ("health_insurance", "Health insurance"),
        ):
            amount = to_amount(getattr(self, name))
            if amount < 0:
                raise ValueError(f"{label} cannot be negative")
            object.__setattr__(self, name, amount)
        object.__setattr__(self, "currency", validate_currency(self.currency))

    @classmethod
    def none(cls, currency: str = "USD") -> "Deductions":
        return cls(ZERO, ZERO, ZERO, currency)

    @classmethod
    def from_rates(
        cls,
        gross: GrossSalary,
        tax_rate: AmountLike,
        social_security_rate: AmountLike,
        health_insurance_rate: AmountLike,
    ) -> "Deductions":
        """Build deductions as fractions (0.15 = 15%) of a gross salary."""
        return cls(
            gross.amount * Decimal(str(tax_rate)),
            gross.amount * Decimal(str(social_security_rate)),
            gross.amount * Decimal(str(health_insurance_rate)),
            gross.currency,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], currency: str = "USD") -> "Deductions":
        return cls(
            data.get("taxes", ZERO),
            data.get("social_security", ZERO),
            data.get("health_insurance", ZERO),
            data.get("currency", currency),
        )

    @property
    def total(self) -> Decimal:
        return self.taxes + self.social_security + self.health_insurance

    def add(self, other: "Deductions") -> "Deductions":
        _ensure_same_currency("add", self.currency, other.currency)
        return Deductions(
            self.taxes + other.taxes,
            self.social_security + other.social_security,
            self.health_insurance + other.health_insurance,
            self.currency,
        )

    def percentage_of(self, gross: GrossSalary) -> Decimal:
        """Share of the gross salary taken by deductions, in percent."""
        _ensure_same_currency("compare", self.currency, gross.currency)
        if gross.amount <= 0:
            raise ValueError("Gross salary must be positive")
        return to_amount(self.total / gross.amount * 100)

    def to_dict(self) -> Dict[str, Decimal]:
        return {
            "taxes": self.taxes,
            "social_security": self.social_security,
            "health_insurance": self.health_insurance,
            "total": self.total,
        }

    def format(self) -> str:
        return f"{self.total:.2f} {self.currency}"

    def __str__(self) -> str:
        return self.format()
