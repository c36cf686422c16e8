# backend/modules/employees/models/employee_models.py

from sqlalchemy import Column, Date, Numeric, String
from sqlalchemy.orm import relationship

from core.database import Base
from core.mixins import TimestampMixin

from ..domain.employee import Employee
from ..domain.value_objects import Email, FullName, Position, Salary


class EmployeeModel(Base, TimestampMixin):
    """Employee record; the domain Employee is rebuilt from these columns"""

    __tablename__ = "employees"

    id = Column(String(36), primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    position = Column(String(100), nullable=False)
    salary_amount = Column(Numeric(10, 2), nullable=False)
    salary_currency = Column(String(3), nullable=False, default="USD")
    hired_at = Column(Date, nullable=False)

    payrolls = relationship(
        "PayrollModel",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    vacations = relationship(
        "VacationModel",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @classmethod
    def from_domain(cls, employee: Employee) -> "EmployeeModel":
        model = cls(id=employee.id)
        model.apply_domain(employee)
        return model

    def apply_domain(self, employee: Employee) -> None:
        """Copy every mutable field of the aggregate onto the row."""
        self.first_name = employee.name.first_name
        self.last_name = employee.name.last_name
        self.email = employee.email.value
        self.position = employee.position.title
        self.salary_amount = employee.salary.amount
        self.salary_currency = employee.salary.currency
        self.hired_at = employee.hired_at
        self.created_at = employee.created_at
        self.updated_at = employee.updated_at

    def to_domain(self) -> Employee:
        return Employee(
            id=self.id,
            name=FullName(self.first_name, self.last_name),
            email=Email(self.email),
            position=Position(self.position),
            salary=Salary(self.salary_amount, self.salary_currency),
            hired_at=self.hired_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Employee {self.id} {self.email}>"
