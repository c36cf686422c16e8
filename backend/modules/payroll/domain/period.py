# backend/modules/payroll/domain/period.py

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

BIWEEKLY_DAYS = 14


@dataclass(frozen=True, slots=True)
class PayrollPeriod:
    """An inclusive date range a payroll is calculated for."""

    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.start_date >= self.end_date:
            raise ValueError("End date must be after start date")

    @classmethod
    def for_month(cls, year: int, month: int) -> "PayrollPeriod":
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month: {month}")
        last_day = calendar.monthrange(year, month)[1]
        return cls(date(year, month, 1), date(year, month, last_day))

    @classmethod
    def biweekly(cls, start_date: date) -> "PayrollPeriod":
        return cls(start_date, start_date + timedelta(days=BIWEEKLY_DAYS - 1))

    @property
    def days_in_period(self) -> int:
        return (self.end_date - self.start_date).days

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, other: "PayrollPeriod") -> bool:
        return self.start_date <= other.end_date and self.end_date >= other.start_date

    def format(self) -> str:
        return f"{self.start_date.isoformat()} to {self.end_date.isoformat()}"

    def __str__(self) -> str:
        return self.format()
