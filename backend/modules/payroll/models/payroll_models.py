# backend/modules/payroll/models/payroll_models.py

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import relationship

from core.database import Base
from core.mixins import TimestampMixin

from ..domain.money import Deductions, GrossSalary, NetSalary
from ..domain.payroll import Payroll
from ..domain.period import PayrollPeriod
from ..domain.status import PayrollStatus


class PayrollModel(Base, TimestampMixin):
    """Payroll record for one employee and one pay period"""

    __tablename__ = "payrolls"

    id = Column(String(36), primary_key=True)
    employee_id = Column(
        String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    gross_salary_amount = Column(Numeric(10, 2), nullable=False)
    gross_salary_currency = Column(String(3), nullable=False)
    taxes_amount = Column(Numeric(10, 2), nullable=False, default=0)
    social_security_amount = Column(Numeric(10, 2), nullable=False, default=0)
    health_insurance_amount = Column(Numeric(10, 2), nullable=False, default=0)
    net_salary_amount = Column(Numeric(10, 2), nullable=False)
    net_salary_currency = Column(String(3), nullable=False)
    status = Column(String(20), nullable=False, default=PayrollStatus.PENDING.value, index=True)
    processed_at = Column(DateTime, nullable=True)
    paid_at = Column(DateTime, nullable=True)

    employee = relationship("EmployeeModel", back_populates="payrolls")

    __table_args__ = (
        Index("idx_payrolls_employee_period", "employee_id", "start_date", "end_date"),
    )

    @classmethod
    def from_domain(cls, payroll: Payroll) -> "PayrollModel":
        model = cls(id=payroll.id, employee_id=payroll.employee_id)
        model.apply_domain(payroll)
        return model

    def apply_domain(self, payroll: Payroll) -> None:
        self.start_date = payroll.period.start_date
        self.end_date = payroll.period.end_date
        self.gross_salary_amount = payroll.gross_salary.amount
        self.gross_salary_currency = payroll.gross_salary.currency
        self.taxes_amount = payroll.deductions.taxes
        self.social_security_amount = payroll.deductions.social_security
        self.health_insurance_amount = payroll.deductions.health_insurance
        self.net_salary_amount = payroll.net_salary.amount
        self.net_salary_currency = payroll.net_salary.currency
        self.status = payroll.status.value
        self.created_at = payroll.created_at
        self.processed_at = payroll.processed_at
        self.paid_at = payroll.paid_at
        self.updated_at = payroll.updated_at

    def to_domain(self) -> Payroll:
        return Payroll(
            id=self.id,
            employee_id=self.employee_id,
            period=PayrollPeriod(self.start_date, self.end_date),
            gross_salary=GrossSalary(self.gross_salary_amount, self.gross_salary_currency),
            deductions=Deductions(
                self.taxes_amount,
                self.social_security_amount,
                self.health_insurance_amount,
                self.gross_salary_currency,
            ),
            net_salary=NetSalary(self.net_salary_amount, self.net_salary_currency),
            status=PayrollStatus(self.status),
            created_at=self.created_at,
            processed_at=self.processed_at,
            paid_at=self.paid_at,
            updated_at=self.updated_at,
        )

    def __repr__(self):
        return f"<Payroll {self.id} employee={self.employee_id} {self.status}>"
