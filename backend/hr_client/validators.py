# backend/hr_client/validators.py

"""Client-side checks for employee form data, run before any request is sent."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

VALID_CURRENCIES = ["EUR", "USD", "GBP", "CAD", "AUD", "JPY"]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SALARY_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")
MAX_POSITION_LENGTH = 100


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_valid_name_format(value: str) -> bool:
    return bool(value) and all(ch.isalpha() or ch.isspace() for ch in value)


def is_valid_email_format(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def has_valid_decimal_places(value: Any) -> bool:
    return bool(SALARY_PATTERN.match(str(value)))


def _validate_name(value: Any, label: str) -> Optional[str]:
    if _blank(value):
        return f"{label} is required"
    value = str(value).strip()
    if len(value) < 2:
        return f"{label} must be at least 2 characters"
    if not is_valid_name_format(value):
        return f"{label} may only contain letters and spaces"
    return None


def validate_first_name(value: Any) -> Optional[str]:
    return _validate_name(value, "First name")


def validate_last_name(value: Any) -> Optional[str]:
    return _validate_name(value, "Last name")


def validate_email(value: Any) -> Optional[str]:
    if _blank(value):
        return "Email is required"
    if not is_valid_email_format(str(value).strip()):
        return "Enter a valid email address"
    return None


def validate_position(value: Any) -> Optional[str]:
    if _blank(value):
        return "Position is required"
    if len(str(value).strip()) > MAX_POSITION_LENGTH:
        return f"Position cannot exceed {MAX_POSITION_LENGTH} characters"
    return None


def validate_salary_amount(value: Any) -> Optional[str]:
    if value is None or value == "":
        return "Salary is required"
    if isinstance(value, bool):
        return "Salary must be a positive number"
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return "Salary must be a positive number"
    if not amount.is_finite() or amount <= 0:
        return "Salary must be a positive number"
    if not has_valid_decimal_places(value):
        return "Salary can have at most 2 decimal places"
    return None


def validate_salary_currency(value: Any) -> Optional[str]:
    if _blank(value):
        return "Currency is required"
    if value not in VALID_CURRENCIES:
        return "Select a valid currency"
    return None


def validate_hired_at(value: Any, today: Optional[date] = None) -> Optional[str]:
    if _blank(value):
        return "Hire date is required"
    if isinstance(value, datetime):
        hired = value.date()
    elif isinstance(value, date):
        hired = value
    else:
        try:
            hired = date.fromisoformat(str(value).strip()[:10])
        except ValueError:
            return "Enter a valid date"
    if hired > (today or date.today()):
        return "Hire date cannot be in the future"
    return None


FIELD_VALIDATORS: Dict[str, Callable[[Any], Optional[str]]] = {
    "firstName": validate_first_name,
    "lastName": validate_last_name,
    "email": validate_email,
    "position": validate_position,
    "salaryAmount": validate_salary_amount,
    "salaryCurrency": validate_salary_currency,
    "hiredAt": validate_hired_at,
}


@dataclass
class ValidationResult:
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_employee_data(data: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    for name, validator in FIELD_VALIDATORS.items():
        message = validator(data.get(name))
        if message:
            result.errors[name] = message
    return result


def validate_field(field_name: str, value: Any) -> Optional[str]:
    validator = FIELD_VALIDATORS.get(field_name)
    if validator is None:
        logger.warning(f"No validator found for field: {field_name}")
        return None
    return validator(value)
