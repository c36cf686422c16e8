# backend/modules/payroll/schemas/payroll_schemas.py

"""
Pydantic schemas for payroll resources.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field, field_validator, model_validator

from core.schema_types import CamelModel, MoneyAmount

from ..domain.money import SUPPORTED_CURRENCIES
from ..domain.payroll import Payroll
from ..domain.status import PayrollStatus

PositiveAmount = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]
NonNegativeAmount = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


def _supported_currency(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    code = v.strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValueError(
            f"Unsupported currency {v}; expected one of {', '.join(sorted(SUPPORTED_CURRENCIES))}"
        )
    return code


class PayrollFields(CamelModel):
    start_date: date
    end_date: date
    gross_salary_amount: PositiveAmount
    gross_salary_currency: str = "USD"
    taxes_amount: NonNegativeAmount = Decimal("0")
    social_security_amount: NonNegativeAmount = Decimal("0")
    health_insurance_amount: NonNegativeAmount = Decimal("0")

    @field_validator("gross_salary_currency")
    @classmethod
    def validate_currency(cls, v):
        return _supported_currency(v)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.start_date >= self.end_date:
            raise ValueError("End date must be after start date")
        return self


class PayrollCreate(PayrollFields):
    """Schema for creating a payroll"""

    employee_id: str = Field(..., min_length=1)


class PayrollUpdate(PayrollFields):
    """Full replacement of a pending payroll (PUT)"""


class PayrollPatch(CamelModel):
    """Partial update of a pending payroll (PATCH)"""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    gross_salary_amount: Optional[PositiveAmount] = None
    taxes_amount: Optional[NonNegativeAmount] = None
    social_security_amount: Optional[NonNegativeAmount] = None
    health_insurance_amount: Optional[NonNegativeAmount] = None


class PayrollRead(CamelModel):
    """Payroll as returned by the API"""

    id: str
    employee_id: str
    start_date: date
    end_date: date
    days_in_period: int
    period_format: str
    gross_salary_amount: MoneyAmount
    gross_salary_currency: str
    taxes_amount: MoneyAmount
    social_security_amount: MoneyAmount
    health_insurance_amount: MoneyAmount
    total_deductions: MoneyAmount
    deduction_percentage: MoneyAmount
    net_salary_amount: MoneyAmount
    net_salary_currency: str
    status: PayrollStatus
    created_at: datetime
    processed_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, payroll: Payroll) -> "PayrollRead":
        return cls(
            id=payroll.id,
            employee_id=payroll.employee_id,
            start_date=payroll.period.start_date,
            end_date=payroll.period.end_date,
            days_in_period=payroll.period.days_in_period,
            period_format=payroll.period.format(),
            gross_salary_amount=payroll.gross_salary.amount,
            gross_salary_currency=payroll.gross_salary.currency,
            taxes_amount=payroll.deductions.taxes,
            social_security_amount=payroll.deductions.social_security,
            health_insurance_amount=payroll.deductions.health_insurance,
            total_deductions=payroll.deductions.total,
            deduction_percentage=payroll.deduction_percentage,
            net_salary_amount=payroll.net_salary.amount,
            net_salary_currency=payroll.net_salary.currency,
            status=payroll.status,
            created_at=payroll.created_at,
            processed_at=payroll.processed_at,
            paid_at=payroll.paid_at,
            updated_at=payroll.updated_at,
        )
