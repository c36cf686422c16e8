"""
Shared building blocks for domain value objects.

Value objects are frozen dataclasses that validate themselves in
``__post_init__`` and raise ``ValueError`` on invalid input.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from email_validator import EmailNotValidError, validate_email

CENT = Decimal("0.01")

AmountLike = Union[Decimal, int, float, str]


def to_amount(value: AmountLike) -> Decimal:
    """Convert a number-like value to a Decimal rounded to cents."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns store values."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def require_text(value: str, message: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(message)
    return str(value).strip()


@dataclass(frozen=True, slots=True)
class Email:
    """A syntactically valid email address."""

    value: str

    def __post_init__(self) -> None:
        raw = require_text(self.value, "Email cannot be empty")
        try:
            normalized = validate_email(raw, check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {raw} ({e})") from None
        object.__setattr__(self, "value", normalized)

    @property
    def domain(self) -> str:
        return self.value.rsplit("@", 1)[1]

    def __str__(self) -> str:
        return self.value
