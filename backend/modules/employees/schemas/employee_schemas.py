# backend/modules/employees/schemas/employee_schemas.py

"""
Pydantic schemas for employee resources.

JSON bodies use camelCase names (firstName, salaryAmount, hiredAt, ...).
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from core.schema_types import CamelModel, MoneyAmount

from ..domain.employee import Employee


def _currency_code(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    code = v.strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError("Currency must be a 3-letter code")
    return code


class EmployeeBase(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    position: str = Field(..., min_length=1, max_length=100)
    salary_amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    salary_currency: str = "USD"
    hired_at: Optional[date] = None

    @field_validator("salary_currency")
    @classmethod
    def validate_currency(cls, v):
        return _currency_code(v)

    @field_validator("hired_at")
    @classmethod
    def validate_hired_at(cls, v):
        if v is not None and v > date.today():
            raise ValueError("Hire date cannot be in the future")
        return v


class EmployeeCreate(EmployeeBase):
    """Schema for creating an employee"""


class EmployeeUpdate(EmployeeBase):
    """Full replacement of an employee (PUT)"""


class EmployeePatch(CamelModel):
    """Partial update of an employee (PATCH)"""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    position: Optional[str] = Field(None, min_length=1, max_length=100)
    salary_amount: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    salary_currency: Optional[str] = None
    hired_at: Optional[date] = None

    @field_validator("salary_currency")
    @classmethod
    def validate_currency(cls, v):
        return _currency_code(v)

    @field_validator("hired_at")
    @classmethod
    def validate_hired_at(cls, v):
        if v is not None and v > date.today():
            raise ValueError("Hire date cannot be in the future")
        return v


class EmployeeRead(CamelModel):
    """Employee as returned by the API"""

    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    position: str
    salary_amount: MoneyAmount
    salary_currency: str
    formatted_salary: str
    hired_at: date
    years_of_service: int
    annual_vacation_days: int
    vacation_eligible: bool
    vacation_eligibility_date: date
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, employee: Employee, eligibility_months: int = 3) -> "EmployeeRead":
        return cls(
            id=employee.id,
            first_name=employee.name.first_name,
            last_name=employee.name.last_name,
            full_name=employee.full_name,
            email=employee.email.value,
            position=employee.position.title,
            salary_amount=employee.salary.amount,
            salary_currency=employee.salary.currency,
            formatted_salary=employee.salary.format(),
            hired_at=employee.hired_at,
            years_of_service=employee.years_of_service(),
            annual_vacation_days=employee.annual_vacation_days(),
            vacation_eligible=employee.is_eligible_for_vacation(months=eligibility_months),
            vacation_eligibility_date=employee.vacation_eligibility_date(eligibility_months),
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )
