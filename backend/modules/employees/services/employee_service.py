# backend/modules/employees/services/employee_service.py

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError
from core.pagination import PageParams, paginate

from ..domain.employee import Employee
from ..models.employee_models import EmployeeModel
from ..schemas.employee_schemas import EmployeeCreate, EmployeePatch, EmployeeUpdate

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for managing employee records"""

    def __init__(self, db: Session):
        self.db = db

    def _ensure_email_available(self, email: str, exclude_id: Optional[str] = None) -> None:
        query = self.db.query(EmployeeModel).filter(
            func.lower(EmployeeModel.email) == email.lower()
        )
        if exclude_id:
            query = query.filter(EmployeeModel.id != exclude_id)
        if query.first():
            raise ConflictError(
                detail=f"Employee with email {email} already exists",
                error_code="DUPLICATE_EMAIL",
            )

    def _get_model(self, employee_id: str) -> EmployeeModel:
        model = self.db.get(EmployeeModel, employee_id)
        if not model:
            raise NotFoundError(detail=f"Employee with ID {employee_id} not found")
        return model

    def create_employee(self, data: EmployeeCreate) -> Employee:
        """Create a new employee"""
        employee = Employee.create(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            position=data.position,
            salary_amount=data.salary_amount,
            salary_currency=data.salary_currency,
            hired_at=data.hired_at,
        )
        self._ensure_email_available(employee.email.value)

        model = EmployeeModel.from_domain(employee)
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)

        logger.info(f"Created employee {model.id} ({model.email})")
        return model.to_domain()

    def get_employee(self, employee_id: str) -> Employee:
        return self._get_model(employee_id).to_domain()

    def list_employees(
        self,
        params: PageParams,
        search: Optional[str] = None,
        position: Optional[str] = None,
    ) -> Tuple[List[Employee], int]:
        query = self.db.query(EmployeeModel)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    EmployeeModel.first_name.ilike(pattern),
                    EmployeeModel.last_name.ilike(pattern),
                    EmployeeModel.email.ilike(pattern),
                )
            )
        if position:
            query = query.filter(EmployeeModel.position == position)

        query = query.order_by(EmployeeModel.last_name, EmployeeModel.first_name, EmployeeModel.id)
        models, total = paginate(query, params)
        return [model.to_domain() for model in models], total

    def _apply_changes(self, employee: Employee, changes: dict) -> None:
        if "first_name" in changes or "last_name" in changes:
            employee.rename(
                changes.get("first_name", employee.name.first_name),
                changes.get("last_name", employee.name.last_name),
            )
        if "email" in changes and changes["email"] != employee.email.value:
            employee.update_email(changes["email"])
            self._ensure_email_available(employee.email.value, exclude_id=employee.id)
        if "position" in changes:
            employee.update_position(changes["position"])
        if "salary_amount" in changes or "salary_currency" in changes:
            employee.update_salary(
                changes.get("salary_amount", employee.salary.amount),
                changes.get("salary_currency") or employee.salary.currency,
            )
        if changes.get("hired_at") is not None:
            employee.update_hire_date(changes["hired_at"])

    def update_employee(self, employee_id: str, data: EmployeeUpdate) -> Employee:
        """Replace all editable fields of an employee"""
        return self._save_changes(employee_id, data.model_dump())

    def patch_employee(self, employee_id: str, data: EmployeePatch) -> Employee:
        """Update only the fields present in the request"""
        return self._save_changes(employee_id, data.model_dump(exclude_unset=True))

    def _save_changes(self, employee_id: str, changes: dict) -> Employee:
        model = self._get_model(employee_id)
        employee = model.to_domain()

        changes = {key: value for key, value in changes.items() if value is not None}
        self._apply_changes(employee, changes)

        model.apply_domain(employee)
        self.db.commit()
        self.db.refresh(model)
        return model.to_domain()

    def delete_employee(self, employee_id: str) -> None:
        """Delete an employee together with their payrolls and vacations"""
        model = self._get_model(employee_id)
        self.db.delete(model)
        self.db.commit()
        logger.info(f"Deleted employee {employee_id}")
