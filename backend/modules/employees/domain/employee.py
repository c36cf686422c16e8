# backend/modules/employees/domain/employee.py

"""
Employee aggregate.

Holds identity, contact and compensation data plus the service-time
rules that drive vacation eligibility and allowance.
"""

import calendar
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from core.values import AmountLike, utcnow

from .value_objects import Email, FullName, Position, Salary

BASE_VACATION_DAYS = 15
DEFAULT_ELIGIBILITY_MONTHS = 3


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the end of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def full_months_between(start: date, end: date) -> int:
    if end < start:
        return 0
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if add_months(start, months) > end:
        months -= 1
    return max(months, 0)


@dataclass(eq=False)
class Employee:
    id: str
    name: FullName
    email: Email
    position: Position
    salary: Salary
    hired_at: date
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        email: str,
        position: str,
        salary_amount: AmountLike,
        salary_currency: str = "USD",
        hired_at: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> "Employee":
        hired_at = hired_at or date.today()
        if hired_at > date.today():
            raise ValueError("Hire date cannot be in the future")

        return cls(
            id=employee_id or str(uuid.uuid4()),
            name=FullName(first_name, last_name),
            email=Email(email),
            position=Position(position),
            salary=Salary.of(salary_amount, salary_currency),
            hired_at=hired_at,
        )

    # Mutations

    def _touch(self) -> None:
        self.updated_at = utcnow()

    def rename(self, first_name: str, last_name: str) -> None:
        self.name = FullName(first_name, last_name)
        self._touch()

    def update_email(self, email: str) -> None:
        self.email = Email(email)
        self._touch()

    def update_position(self, position: str) -> None:
        self.position = Position(position)
        self._touch()

    def update_salary(self, amount: AmountLike, currency: Optional[str] = None) -> None:
        self.salary = Salary.of(amount, currency or self.salary.currency)
        self._touch()

    def update_hire_date(self, hired_at: date) -> None:
        if hired_at > date.today():
            raise ValueError("Hire date cannot be in the future")
        self.hired_at = hired_at
        self._touch()

    # Service time

    @property
    def full_name(self) -> str:
        return self.name.full_name

    def months_of_service(self, today: Optional[date] = None) -> int:
        return full_months_between(self.hired_at, today or date.today())

    def years_of_service(self, today: Optional[date] = None) -> int:
        return self.months_of_service(today) // 12

    def annual_vacation_days(self, today: Optional[date] = None) -> int:
        """15 days base, 20 after five years, 25 after ten years."""
        years = self.years_of_service(today)
        if years >= 10:
            return BASE_VACATION_DAYS + 10
        if years >= 5:
            return BASE_VACATION_DAYS + 5
        return BASE_VACATION_DAYS

    def vacation_eligibility_date(self, months: int = DEFAULT_ELIGIBILITY_MONTHS) -> date:
        return add_months(self.hired_at, months)

    def is_eligible_for_vacation(
        self, today: Optional[date] = None, months: int = DEFAULT_ELIGIBILITY_MONTHS
    ) -> bool:
        return self.months_of_service(today) >= months
