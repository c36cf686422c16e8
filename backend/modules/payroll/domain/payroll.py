# backend/modules/payroll/domain/payroll.py

"""
Payroll aggregate.

A payroll ties an employee to a pay period with a gross salary and its
deductions. Net salary is always derived: gross minus total deductions,
and it must stay positive.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.domain_errors import DomainRuleError
from core.values import utcnow

from .money import Deductions, GrossSalary, NetSalary
from .period import PayrollPeriod
from .status import PayrollStatus


def calculate_net_salary(gross: GrossSalary, deductions: Deductions) -> NetSalary:
    if gross.currency != deductions.currency:
        raise ValueError(
            f"Cannot subtract different currencies: {gross.currency} and {deductions.currency}"
        )
    net_amount = gross.amount - deductions.total
    if net_amount <= 0:
        raise ValueError("Deductions cannot exceed gross salary")
    return NetSalary(net_amount, gross.currency)


@dataclass(eq=False)
class Payroll:
    id: str
    employee_id: str
    period: PayrollPeriod
    gross_salary: GrossSalary
    deductions: Deductions
    net_salary: NetSalary
    status: PayrollStatus = PayrollStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    processed_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        employee_id: str,
        period: PayrollPeriod,
        gross_salary: GrossSalary,
        deductions: Deductions,
        payroll_id: Optional[str] = None,
    ) -> "Payroll":
        return cls(
            id=payroll_id or str(uuid.uuid4()),
            employee_id=employee_id,
            period=period,
            gross_salary=gross_salary,
            deductions=deductions,
            net_salary=calculate_net_salary(gross_salary, deductions),
        )

    def _touch(self) -> None:
        self.updated_at = utcnow()

    def process(self) -> None:
        self.status = self.status.process()
        self.processed_at = utcnow()
        self._touch()

    def pay(self) -> None:
        self.status = self.status.pay()
        self.paid_at = utcnow()
        self._touch()

    def cancel(self) -> None:
        self.status = self.status.cancel()
        self._touch()

    def _ensure_editable(self) -> None:
        if not self.status.is_editable:
            raise DomainRuleError(
                f"Can only update {PayrollStatus.PENDING.value} payrolls, this one is {self.status.value}"
            )

    def update_amounts(self, gross_salary: GrossSalary, deductions: Deductions) -> None:
        """Replace gross salary and deductions together and recompute net salary."""
        self._ensure_editable()
        self.net_salary = calculate_net_salary(gross_salary, deductions)
        self.gross_salary = gross_salary
        self.deductions = deductions
        self._touch()

    def update_deductions(self, deductions: Deductions) -> None:
        self.update_amounts(self.gross_salary, deductions)

    def update_gross_salary(self, gross_salary: GrossSalary) -> None:
        self.update_amounts(gross_salary, self.deductions)

    def update_period(self, period: PayrollPeriod) -> None:
        self._ensure_editable()
        self.period = period
        self._touch()

    @property
    def deduction_percentage(self):
        return self.deductions.percentage_of(self.gross_salary)

    @property
    def is_pending(self) -> bool:
        return self.status is PayrollStatus.PENDING

    @property
    def is_processed(self) -> bool:
        return self.status is PayrollStatus.PROCESSED

    @property
    def is_paid(self) -> bool:
        return self.status is PayrollStatus.PAID

    @property
    def is_cancelled(self) -> bool:
        return self.status is PayrollStatus.CANCELLED
