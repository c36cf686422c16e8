# backend/modules/payroll/domain/status.py

from enum import Enum

from core.domain_errors import InvalidStatusTransition


class PayrollStatus(str, Enum):
    """Payroll lifecycle: pending -> processed -> paid, or pending -> cancelled"""

    PENDING = "pending"
    PROCESSED = "processed"
    PAID = "paid"
    CANCELLED = "cancelled"

    def _transition(self, action: str, allowed_from: "PayrollStatus", target: "PayrollStatus") -> "PayrollStatus":
        if self is not allowed_from:
            raise InvalidStatusTransition("payroll", self.value, action)
        return target

    def process(self) -> "PayrollStatus":
        return self._transition("process", PayrollStatus.PENDING, PayrollStatus.PROCESSED)

    def pay(self) -> "PayrollStatus":
        return self._transition("pay", PayrollStatus.PROCESSED, PayrollStatus.PAID)

    def cancel(self) -> "PayrollStatus":
        return self._transition("cancel", PayrollStatus.PENDING, PayrollStatus.CANCELLED)

    @property
    def is_final(self) -> bool:
        return self in (PayrollStatus.PAID, PayrollStatus.CANCELLED)

    @property
    def is_editable(self) -> bool:
        return self is PayrollStatus.PENDING
