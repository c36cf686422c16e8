# backend/modules/vacations/domain/period.py

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

MAX_VACATION_DAYS = 365


@dataclass(frozen=True, slots=True)
class VacationPeriod:
    """Inclusive range of days off. Weekends count as days but not working days."""

    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.start_date >= self.end_date:
            raise ValueError("End date must be after start date")
        if self.days_count > MAX_VACATION_DAYS:
            raise ValueError(f"Vacation period cannot exceed {MAX_VACATION_DAYS} days")

    @classmethod
    def upcoming(
        cls, start_date: date, end_date: date, today: Optional[date] = None
    ) -> "VacationPeriod":
        """A period for a new request; it cannot start in the past."""
        if start_date < (today or date.today()):
            raise ValueError("Vacation cannot start in the past")
        return cls(start_date, end_date)

    @property
    def days_count(self) -> int:
        return (self.end_date - self.start_date).days + 1

    @property
    def working_days_count(self) -> int:
        return sum(1 for day in self.days() if day.weekday() < 5)

    def days(self):
        current = self.start_date
        while current <= self.end_date:
            yield current
            current += timedelta(days=1)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, other: "VacationPeriod") -> bool:
        return self.start_date <= other.end_date and self.end_date >= other.start_date

    def format(self) -> str:
        return (
            f"{self.start_date.isoformat()} to {self.end_date.isoformat()} "
            f"({self.days_count} days)"
        )

    def __str__(self) -> str:
        return self.format()
