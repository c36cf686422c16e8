# backend/modules/vacations/schemas/vacation_schemas.py

from datetime import date, datetime
from typing import Optional

from pydantic import Field, model_validator

from core.schema_types import CamelModel

from ..domain.status import VacationStatus
from ..domain.vacation import MAX_REASON_LENGTH, Vacation


class VacationFields(CamelModel):
    start_date: date
    end_date: date
    reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.start_date >= self.end_date:
            raise ValueError("End date must be after start date")
        return self


class VacationCreate(VacationFields):
    """Schema for requesting a vacation"""

    employee_id: str = Field(..., min_length=1)


class VacationUpdate(VacationFields):
    """Full replacement of a pending vacation (PUT)"""


class VacationPatch(CamelModel):
    """Partial update of a pending vacation (PATCH)"""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)


class VacationRejection(CamelModel):
    reason: str = Field(..., min_length=1, max_length=MAX_REASON_LENGTH)


class VacationRead(CamelModel):
    """Vacation as returned by the API"""

    id: str
    employee_id: str
    start_date: date
    end_date: date
    days_count: int
    working_days_count: int
    period_format: str
    reason: Optional[str] = None
    status: VacationStatus
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, vacation: Vacation) -> "VacationRead":
        return cls(
            id=vacation.id,
            employee_id=vacation.employee_id,
            start_date=vacation.period.start_date,
            end_date=vacation.period.end_date,
            days_count=vacation.days_requested,
            working_days_count=vacation.working_days_requested,
            period_format=vacation.period.format(),
            reason=vacation.reason,
            status=vacation.status,
            approved_at=vacation.approved_at,
            rejection_reason=vacation.rejection_reason,
            created_at=vacation.created_at,
            updated_at=vacation.updated_at,
        )
