# backend/modules/vacations/domain/vacation.py

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional

from core.domain_errors import DomainRuleError
from core.values import require_text, utcnow

from .period import VacationPeriod
from .status import VacationStatus

MAX_REASON_LENGTH = 1000


def _clean_reason(reason: Optional[str]) -> Optional[str]:
    if reason is None or not reason.strip():
        return None
    reason = reason.strip()
    if len(reason) > MAX_REASON_LENGTH:
        raise ValueError(f"Reason cannot exceed {MAX_REASON_LENGTH} characters")
    return reason


@dataclass(eq=False)
class Vacation:
    id: str
    employee_id: str
    period: VacationPeriod
    reason: Optional[str] = None
    status: VacationStatus = VacationStatus.PENDING
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @classmethod
    def request(
        cls,
        employee_id: str,
        period: VacationPeriod,
        reason: Optional[str] = None,
        vacation_id: Optional[str] = None,
    ) -> "Vacation":
        return cls(
            id=vacation_id or str(uuid.uuid4()),
            employee_id=employee_id,
            period=period,
            reason=_clean_reason(reason),
        )

    def _touch(self) -> None:
        self.updated_at = utcnow()

    def approve(self) -> None:
        self.status = self.status.approve()
        self.approved_at = utcnow()
        self.rejection_reason = None
        self._touch()

    def reject(self, reason: str) -> None:
        rejection_reason = require_text(reason, "Rejection reason is required")
        self.status = self.status.reject()
        self.rejection_reason = rejection_reason
        self.approved_at = None
        self._touch()

    def cancel(self) -> None:
        self.status = self.status.cancel()
        self._touch()

    def _ensure_pending(self, what: str) -> None:
        if self.status is not VacationStatus.PENDING:
            raise DomainRuleError(f"Can only update {what} for pending vacations")

    def update_reason(self, reason: Optional[str]) -> None:
        self._ensure_pending("reason")
        self.reason = _clean_reason(reason)
        self._touch()

    def update_period(self, period: VacationPeriod) -> None:
        self._ensure_pending("period")
        self.period = period
        self._touch()

    @property
    def days_requested(self) -> int:
        return self.period.days_count

    @property
    def working_days_requested(self) -> int:
        return self.period.working_days_count

    def is_active(self, today: Optional[date] = None) -> bool:
        return self.status is VacationStatus.APPROVED and self.period.contains(today or date.today())

    def is_upcoming(self, today: Optional[date] = None) -> bool:
        return self.status is VacationStatus.APPROVED and self.period.start_date > (today or date.today())

    def is_past(self, today: Optional[date] = None) -> bool:
        return self.period.end_date < (today or date.today())

    def overlaps(self, other: "Vacation") -> bool:
        return self.period.overlaps(other.period)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "start_date": self.period.start_date.isoformat(),
            "end_date": self.period.end_date.isoformat(),
            "days_count": self.days_requested,
            "working_days_count": self.working_days_requested,
            "reason": self.reason,
            "status": self.status.value,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
            "rejection_reason": self.rejection_reason,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
