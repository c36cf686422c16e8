# backend/modules/vacations/models/vacation_models.py

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from core.database import Base
from core.mixins import TimestampMixin

from ..domain.period import VacationPeriod
from ..domain.status import VacationStatus
from ..domain.vacation import Vacation


class VacationModel(Base, TimestampMixin):
    """Vacation request of an employee"""

    __tablename__ = "vacations"

    id = Column(String(36), primary_key=True)
    employee_id = Column(
        String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=VacationStatus.PENDING.value, index=True)
    approved_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    employee = relationship("EmployeeModel", back_populates="vacations")

    __table_args__ = (
        Index("idx_vacations_employee_dates", "employee_id", "start_date", "end_date"),
    )

    @classmethod
    def from_domain(cls, vacation: Vacation) -> "VacationModel":
        model = cls(id=vacation.id, employee_id=vacation.employee_id)
        model.apply_domain(vacation)
        return model

    def apply_domain(self, vacation: Vacation) -> None:
        self.start_date = vacation.period.start_date
        self.end_date = vacation.period.end_date
        self.reason = vacation.reason
        self.status = vacation.status.value
        self.approved_at = vacation.approved_at
        self.rejection_reason = vacation.rejection_reason
        self.created_at = vacation.created_at
        self.updated_at = vacation.updated_at

    def to_domain(self) -> Vacation:
        return Vacation(
            id=self.id,
            employee_id=self.employee_id,
            period=VacationPeriod(self.start_date, self.end_date),
            reason=self.reason,
            status=VacationStatus(self.status),
            approved_at=self.approved_at,
            rejection_reason=self.rejection_reason,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def __repr__(self):
        return f"<Vacation {self.id} employee={self.employee_id} {self.status}>"
