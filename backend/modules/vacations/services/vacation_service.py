# backend/modules/vacations/services/vacation_service.py

import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from core.config import settings
from core.domain_errors import DomainRuleError
from core.exceptions import NotFoundError
from core.pagination import PageParams, paginate
from modules.employees.models.employee_models import EmployeeModel

from ..domain.period import VacationPeriod
from ..domain.status import VacationStatus
from ..domain.vacation import Vacation
from ..models.vacation_models import VacationModel
from ..schemas.vacation_schemas import VacationCreate, VacationPatch, VacationUpdate

logger = logging.getLogger(__name__)


class VacationService:
    """Service for vacation requests and their approval workflow"""

    def __init__(self, db: Session, eligibility_months: Optional[int] = None):
        self.db = db
        self.eligibility_months = eligibility_months or settings.vacation_eligibility_months

    def _get_model(self, vacation_id: str) -> VacationModel:
        model = self.db.get(VacationModel, vacation_id)
        if not model:
            raise NotFoundError(detail=f"Vacation with ID {vacation_id} not found")
        return model

    def _ensure_eligible(self, employee_id: str, today: Optional[date] = None) -> None:
        employee_model = self.db.get(EmployeeModel, employee_id)
        if not employee_model:
            raise NotFoundError(detail=f"Employee with ID {employee_id} not found")

        employee = employee_model.to_domain()
        if not employee.is_eligible_for_vacation(today, months=self.eligibility_months):
            eligible_from = employee.vacation_eligibility_date(self.eligibility_months)
            raise DomainRuleError(
                f"{employee.full_name} is not eligible for vacation until {eligible_from.isoformat()}"
            )

    def request_vacation(self, data: VacationCreate, today: Optional[date] = None) -> Vacation:
        self._ensure_eligible(data.employee_id, today)

        vacation = Vacation.request(
            employee_id=data.employee_id,
            period=VacationPeriod.upcoming(data.start_date, data.end_date, today),
            reason=data.reason,
        )
        model = VacationModel.from_domain(vacation)
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)

        logger.info(
            f"Vacation {model.id} requested for employee {model.employee_id}: {vacation.period.format()}"
        )
        return model.to_domain()

    def get_vacation(self, vacation_id: str) -> Vacation:
        return self._get_model(vacation_id).to_domain()

    def list_vacations(
        self,
        params: PageParams,
        employee_id: Optional[str] = None,
        status: Optional[VacationStatus] = None,
    ) -> Tuple[List[Vacation], int]:
        query = self.db.query(VacationModel)
        if employee_id:
            query = query.filter(VacationModel.employee_id == employee_id)
        if status:
            query = query.filter(VacationModel.status == status.value)

        query = query.order_by(VacationModel.start_date, VacationModel.id)
        models, total = paginate(query, params)
        return [model.to_domain() for model in models], total

    def update_vacation(self, vacation_id: str, data: VacationUpdate) -> Vacation:
        return self._save_changes(vacation_id, data.model_dump(), replace=True)

    def patch_vacation(self, vacation_id: str, data: VacationPatch) -> Vacation:
        return self._save_changes(vacation_id, data.model_dump(exclude_unset=True))

    def _save_changes(self, vacation_id: str, changes: dict, replace: bool = False) -> Vacation:
        model = self._get_model(vacation_id)
        vacation = model.to_domain()

        start = changes.get("start_date") or vacation.period.start_date
        end = changes.get("end_date") or vacation.period.end_date
        if (start, end) != (vacation.period.start_date, vacation.period.end_date):
            vacation.update_period(VacationPeriod.upcoming(start, end))
        if replace or "reason" in changes:
            vacation.update_reason(changes.get("reason"))

        model.apply_domain(vacation)
        self.db.commit()
        self.db.refresh(model)
        return model.to_domain()

    def _decide(self, vacation_id: str, action: str, *args) -> Vacation:
        model = self._get_model(vacation_id)
        vacation = model.to_domain()
        getattr(vacation, action)(*args)

        model.apply_domain(vacation)
        self.db.commit()
        self.db.refresh(model)
        logger.info(f"Vacation {vacation_id} is now {vacation.status.value}")
        return model.to_domain()

    def approve_vacation(self, vacation_id: str) -> Vacation:
        return self._decide(vacation_id, "approve")

    def reject_vacation(self, vacation_id: str, reason: str) -> Vacation:
        return self._decide(vacation_id, "reject", reason)

    def cancel_vacation(self, vacation_id: str) -> Vacation:
        return self._decide(vacation_id, "cancel")

    def delete_vacation(self, vacation_id: str) -> None:
        model = self._get_model(vacation_id)
        self.db.delete(model)
        self.db.commit()
