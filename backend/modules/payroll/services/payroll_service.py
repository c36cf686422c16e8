# backend/modules/payroll/services/payroll_service.py

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from core.domain_errors import DomainRuleError
from core.exceptions import NotFoundError
from core.pagination import PageParams, paginate
from modules.employees.models.employee_models import EmployeeModel

from ..domain.money import Deductions, GrossSalary
from ..domain.payroll import Payroll
from ..domain.period import PayrollPeriod
from ..domain.status import PayrollStatus
from ..models.payroll_models import PayrollModel
from ..schemas.payroll_schemas import PayrollCreate, PayrollPatch, PayrollUpdate

logger = logging.getLogger(__name__)


class PayrollService:
    """Service for calculating and moving payrolls through their lifecycle"""

    def __init__(self, db: Session):
        self.db = db

    def _get_model(self, payroll_id: str) -> PayrollModel:
        model = self.db.get(PayrollModel, payroll_id)
        if not model:
            raise NotFoundError(detail=f"Payroll with ID {payroll_id} not found")
        return model

    def _ensure_employee_exists(self, employee_id: str) -> None:
        if not self.db.get(EmployeeModel, employee_id):
            raise NotFoundError(detail=f"Employee with ID {employee_id} not found")

    def _ensure_no_overlap(self, payroll: Payroll) -> None:
        """An employee cannot be paid twice for the same day."""
        candidates = (
            self.db.query(PayrollModel)
            .filter(
                PayrollModel.employee_id == payroll.employee_id,
                PayrollModel.id != payroll.id,
                PayrollModel.status != PayrollStatus.CANCELLED.value,
                PayrollModel.start_date <= payroll.period.end_date,
                PayrollModel.end_date >= payroll.period.start_date,
            )
            .all()
        )
        for candidate in candidates:
            existing = candidate.to_domain().period
            if existing.overlaps(payroll.period):
                raise DomainRuleError(f"Employee already has a payroll for {existing.format()}")

    def create_payroll(self, data: PayrollCreate) -> Payroll:
        self._ensure_employee_exists(data.employee_id)

        gross = GrossSalary(data.gross_salary_amount, data.gross_salary_currency)
        payroll = Payroll.create(
            employee_id=data.employee_id,
            period=PayrollPeriod(data.start_date, data.end_date),
            gross_salary=gross,
            deductions=Deductions(
                data.taxes_amount,
                data.social_security_amount,
                data.health_insurance_amount,
                gross.currency,
            ),
        )
        self._ensure_no_overlap(payroll)

        model = PayrollModel.from_domain(payroll)
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)

        logger.info(
            f"Created payroll {model.id} for employee {model.employee_id} "
            f"({payroll.period.format()}, net {payroll.net_salary.format()})"
        )
        return model.to_domain()

    def get_payroll(self, payroll_id: str) -> Payroll:
        return self._get_model(payroll_id).to_domain()

    def list_payrolls(
        self,
        params: PageParams,
        employee_id: Optional[str] = None,
        status: Optional[PayrollStatus] = None,
    ) -> Tuple[List[Payroll], int]:
        query = self.db.query(PayrollModel)
        if employee_id:
            query = query.filter(PayrollModel.employee_id == employee_id)
        if status:
            query = query.filter(PayrollModel.status == status.value)

        query = query.order_by(PayrollModel.start_date.desc(), PayrollModel.id)
        models, total = paginate(query, params)
        return [model.to_domain() for model in models], total

    def update_payroll(self, payroll_id: str, data: PayrollUpdate) -> Payroll:
        return self._save_changes(payroll_id, data.model_dump())

    def patch_payroll(self, payroll_id: str, data: PayrollPatch) -> Payroll:
        return self._save_changes(payroll_id, data.model_dump(exclude_unset=True))

    def _save_changes(self, payroll_id: str, changes: dict) -> Payroll:
        model = self._get_model(payroll_id)
        payroll = model.to_domain()
        changes = {key: value for key, value in changes.items() if value is not None}

        if "start_date" in changes or "end_date" in changes:
            payroll.update_period(
                PayrollPeriod(
                    changes.get("start_date", payroll.period.start_date),
                    changes.get("end_date", payroll.period.end_date),
                )
            )
            self._ensure_no_overlap(payroll)

        amount_keys = {
            "gross_salary_amount",
            "gross_salary_currency",
            "taxes_amount",
            "social_security_amount",
            "health_insurance_amount",
        }
        if amount_keys & changes.keys():
            currency = changes.get("gross_salary_currency", payroll.gross_salary.currency)
            payroll.update_amounts(
                GrossSalary(changes.get("gross_salary_amount", payroll.gross_salary.amount), currency),
                Deductions(
                    changes.get("taxes_amount", payroll.deductions.taxes),
                    changes.get("social_security_amount", payroll.deductions.social_security),
                    changes.get("health_insurance_amount", payroll.deductions.health_insurance),
                    currency,
                ),
            )

        model.apply_domain(payroll)
        self.db.commit()
        self.db.refresh(model)
        return model.to_domain()

    def _transition(self, payroll_id: str, action: str) -> Payroll:
        model = self._get_model(payroll_id)
        payroll = model.to_domain()
        getattr(payroll, action)()

        model.apply_domain(payroll)
        self.db.commit()
        self.db.refresh(model)
        logger.info(f"Payroll {payroll_id} is now {payroll.status.value}")
        return model.to_domain()

    def process_payroll(self, payroll_id: str) -> Payroll:
        return self._transition(payroll_id, "process")

    def pay_payroll(self, payroll_id: str) -> Payroll:
        return self._transition(payroll_id, "pay")

    def cancel_payroll(self, payroll_id: str) -> Payroll:
        return self._transition(payroll_id, "cancel")

    def delete_payroll(self, payroll_id: str) -> None:
        """Only payrolls that never reached processing can be deleted"""
        model = self._get_model(payroll_id)
        if model.status not in (PayrollStatus.PENDING.value, PayrollStatus.CANCELLED.value):
            raise DomainRuleError(f"Cannot delete a {model.status} payroll")
        self.db.delete(model)
        self.db.commit()
