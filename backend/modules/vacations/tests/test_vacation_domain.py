# backend/modules/vacations/tests/test_vacation_domain.py

"""
Tests for VacationPeriod, VacationStatus and the Vacation aggregate.
"""

from datetime import date, timedelta

import pytest

from core.domain_errors import DomainRuleError, InvalidStatusTransition
from modules.vacations.domain.period import VacationPeriod
from modules.vacations.domain.status import VacationStatus
from modules.vacations.domain.vacation import Vacation

TODAY = date(2024, 6, 3)  # a Monday


def make_vacation(start=date(2024, 7, 1), end=date(2024, 7, 12), reason="Family vacation") -> Vacation:
    return Vacation.request("emp-1", VacationPeriod(start, end), reason)


class TestVacationPeriod:
    def test_end_must_be_after_start(self):
        with pytest.raises(ValueError, match="End date must be after start date"):
            VacationPeriod(date(2024, 7, 5), date(2024, 7, 5))

    def test_cannot_exceed_a_year(self):
        with pytest.raises(ValueError, match="cannot exceed 365 days"):
            VacationPeriod(date(2024, 1, 1), date(2025, 1, 2))

    def test_full_leap_year_exceeds_limit(self):
        with pytest.raises(ValueError, match="cannot exceed 365 days"):
            VacationPeriod(date(2024, 1, 1), date(2024, 12, 31))

    def test_full_common_year_is_allowed(self):
        period = VacationPeriod(date(2025, 1, 1), date(2025, 12, 31))
        assert period.days_count == 365

    def test_upcoming_rejects_past_start(self):
        with pytest.raises(ValueError, match="Vacation cannot start in the past"):
            VacationPeriod.upcoming(TODAY - timedelta(days=1), TODAY + timedelta(days=3), TODAY)

    def test_upcoming_allows_today(self):
        period = VacationPeriod.upcoming(TODAY, TODAY + timedelta(days=4), TODAY)
        assert period.start_date == TODAY

    def test_day_counts(self):
        # Monday to the following Sunday
        period = VacationPeriod(date(2024, 6, 3), date(2024, 6, 9))
        assert period.days_count == 7
        assert period.working_days_count == 5
        assert list(period.days())[-1] == date(2024, 6, 9)

    def test_overlaps(self):
        first = VacationPeriod(date(2024, 7, 1), date(2024, 7, 10))
        assert first.overlaps(VacationPeriod(date(2024, 7, 10), date(2024, 7, 12)))
        assert not first.overlaps(VacationPeriod(date(2024, 7, 11), date(2024, 7, 12)))

    def test_format(self):
        period = VacationPeriod(date(2024, 7, 1), date(2024, 7, 5))
        assert period.format() == "2024-07-01 to 2024-07-05 (5 days)"


class TestVacationStatus:
    @pytest.mark.parametrize(
        "action,expected",
        [
            ("approve", VacationStatus.APPROVED),
            ("reject", VacationStatus.REJECTED),
            ("cancel", VacationStatus.CANCELLED),
        ],
    )
    def test_decisions_from_pending(self, action, expected):
        assert getattr(VacationStatus.PENDING, action)() is expected

    @pytest.mark.parametrize(
        "status", [VacationStatus.APPROVED, VacationStatus.REJECTED, VacationStatus.CANCELLED]
    )
    @pytest.mark.parametrize("action", ["approve", "reject", "cancel"])
    def test_decided_requests_are_final(self, status, action):
        assert status.is_final
        with pytest.raises(InvalidStatusTransition):
            getattr(status, action)()


class TestVacation:
    def test_request_starts_pending(self):
        vacation = make_vacation()
        assert vacation.status is VacationStatus.PENDING
        assert vacation.days_requested == 12
        assert vacation.working_days_requested == 10

    def test_approve_records_time(self):
        vacation = make_vacation()
        vacation.approve()
        assert vacation.status is VacationStatus.APPROVED
        assert vacation.approved_at is not None
        assert vacation.updated_at is not None

    def test_reject_requires_reason(self):
        vacation = make_vacation()
        with pytest.raises(ValueError, match="Rejection reason is required"):
            vacation.reject("  ")
        assert vacation.status is VacationStatus.PENDING

        vacation.reject("Team coverage needed")
        assert vacation.status is VacationStatus.REJECTED
        assert vacation.rejection_reason == "Team coverage needed"
        assert vacation.approved_at is None

    def test_cannot_approve_rejected(self):
        vacation = make_vacation()
        vacation.reject("Dates not available")
        with pytest.raises(InvalidStatusTransition, match="Cannot approve a rejected vacation"):
            vacation.approve()

    def test_blank_reason_is_stored_as_none(self):
        assert make_vacation(reason="   ").reason is None

    def test_reason_length_limit(self):
        with pytest.raises(ValueError):
            make_vacation(reason="x" * 1001)

    def test_updates_only_while_pending(self):
        vacation = make_vacation()
        vacation.update_reason("Trip")
        assert vacation.reason == "Trip"
        vacation.approve()
        with pytest.raises(DomainRuleError):
            vacation.update_reason("Other")
        with pytest.raises(DomainRuleError):
            vacation.update_period(VacationPeriod(date(2024, 8, 1), date(2024, 8, 5)))

    def test_activity_helpers(self):
        vacation = make_vacation()
        vacation.approve()
        assert vacation.is_upcoming(today=TODAY)
        assert vacation.is_active(today=date(2024, 7, 3))
        assert vacation.is_past(today=date(2024, 8, 1))

    def test_to_dict(self):
        data = make_vacation().to_dict()
        assert data["status"] == "pending"
        assert data["start_date"] == "2024-07-01"
        assert data["approved_at"] is None
