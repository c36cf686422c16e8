# backend/modules/vacations/domain/status.py

from enum import Enum

from core.domain_errors import InvalidStatusTransition


class VacationStatus(str, Enum):
    """Vacation request lifecycle; every decision is taken from pending"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    def _from_pending(self, action: str, target: "VacationStatus") -> "VacationStatus":
        if self is not VacationStatus.PENDING:
            raise InvalidStatusTransition("vacation", self.value, action)
        return target

    def approve(self) -> "VacationStatus":
        return self._from_pending("approve", VacationStatus.APPROVED)

    def reject(self) -> "VacationStatus":
        return self._from_pending("reject", VacationStatus.REJECTED)

    def cancel(self) -> "VacationStatus":
        return self._from_pending("cancel", VacationStatus.CANCELLED)

    @property
    def is_final(self) -> bool:
        return self is not VacationStatus.PENDING
