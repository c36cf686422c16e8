# backend/modules/fixtures/fixture_loader.py

"""
Demo data for local development.

Creates login users, a few dozen employees with realistic salaries,
monthly payrolls since each hire date and upcoming vacation requests.
All randomness comes from one Faker instance so a seed reproduces a run.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from faker import Faker
from sqlalchemy.orm import Session

from core.query_logger import log_query_performance
from modules.auth.domain.user import ROLE_ADMIN, User
from modules.auth.models.user_models import UserModel
from modules.employees.domain.employee import Employee, add_months
from modules.employees.models.employee_models import EmployeeModel
from modules.payroll.domain.money import Deductions, GrossSalary
from modules.payroll.domain.payroll import Payroll
from modules.payroll.domain.period import PayrollPeriod
from modules.payroll.models.payroll_models import PayrollModel
from modules.vacations.domain.period import VacationPeriod
from modules.vacations.domain.vacation import Vacation
from modules.vacations.models.vacation_models import VacationModel

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "password123"

DEMO_USERS = [
    {"email": "admin@hr-system.com", "name": "HR Administrator", "roles": [ROLE_ADMIN], "active": True},
    {"email": "user@hr-system.com", "name": "HR User", "roles": [], "active": True},
    {"email": "inactive@hr-system.com", "name": "Inactive User", "roles": [], "active": False},
]

POSITION_SALARY_RANGES: Dict[str, Tuple[int, int]] = {
    "Software Developer": (45000, 85000),
    "Senior Software Developer": (70000, 120000),
    "Project Manager": (60000, 95000),
    "QA Engineer": (40000, 70000),
    "DevOps Engineer": (65000, 110000),
    "UX Designer": (50000, 80000),
    "Data Analyst": (55000, 85000),
    "Product Owner": (70000, 100000),
    "Scrum Master": (60000, 90000),
    "Frontend Developer": (45000, 80000),
    "Backend Developer": (50000, 90000),
    "Full Stack Developer": (55000, 95000),
    "System Administrator": (45000, 75000),
    "Database Administrator": (60000, 95000),
    "Security Engineer": (70000, 115000),
}

# Salaries are drawn in USD and converted with these factors.
EMPLOYEE_CURRENCY_FACTORS: Dict[str, Decimal] = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.85"),
    "ARS": Decimal("350"),
}

# Payroll only supports a fixed currency list; ARS salaries are paid in USD.
PAYROLL_CURRENCY_MAP: Dict[str, Tuple[str, Decimal]] = {
    "USD": ("USD", Decimal("1")),
    "EUR": ("EUR", Decimal("1")),
    "ARS": ("USD", Decimal("350")),
}

VACATION_REASONS = [
    "Family vacation",
    "Personal rest",
    "Travel",
    "Personal matters",
    "Summer holidays",
    "Christmas holidays",
    "Winter holidays",
    "Honeymoon",
    "Family visit",
    "Medical rest",
    "Scheduled vacation",
    "Personal time",
]

REJECTION_REASONS = [
    "Busy period in the project",
    "Conflicts with other team members' vacations",
    "Team coverage needed",
    "Dates not available",
    "Request outside of policy",
    "High demand period",
]

MAX_PERIOD_ATTEMPTS = 10


@dataclass
class FixtureSummary:
    users: int = 0
    employees: int = 0
    payrolls: int = 0
    vacations: int = 0
    payroll_status: Dict[str, int] = field(default_factory=dict)
    vacation_status: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "users": self.users,
            "employees": self.employees,
            "payrolls": self.payrolls,
            "vacations": self.vacations,
            "payroll_status": dict(self.payroll_status),
            "vacation_status": dict(self.vacation_status),
        }


def _email_part(value: str) -> str:
    return re.sub(r"[^a-z]", "", value.lower()) or "employee"


def working_days_end(start: date, working_days: int, max_span: int = 30) -> date:
    """Walk forward from start until the given number of Mon-Fri days has passed."""
    end = start
    added = 0
    span = 0
    while added < working_days and span <= max_span:
        end += timedelta(days=1)
        span += 1
        if end.weekday() < 5:
            added += 1
    return end


class FixtureLoader:
    def __init__(self, db: Session, seed: Optional[int] = None, today: Optional[date] = None):
        self.db = db
        self.today = today or date.today()
        self.faker = Faker()
        if seed is not None:
            self.faker.seed_instance(seed)

    def _chance(self) -> float:
        return self.faker.random.random()

    # Users

    def load_users(self) -> List[User]:
        users = []
        for demo_user in DEMO_USERS:
            user = User.create(
                email=demo_user["email"],
                plain_password=DEFAULT_PASSWORD,
                name=demo_user["name"],
                roles=demo_user["roles"],
            )
            if not demo_user["active"]:
                user.deactivate()
            self.db.add(UserModel.from_domain(user))
            users.append(user)
        self.db.flush()
        return users

    # Employees

    def build_employee(self, index: int) -> Employee:
        first_name = self.faker.first_name()
        last_name = self.faker.last_name()
        position = self.faker.random_element(list(POSITION_SALARY_RANGES))
        low, high = POSITION_SALARY_RANGES[position]
        currency = self.faker.random_element(list(EMPLOYEE_CURRENCY_FACTORS))
        salary = Decimal(self.faker.random_int(low, high)) * EMPLOYEE_CURRENCY_FACTORS[currency]
        hired_at = self.faker.date_between(
            start_date=self.today - timedelta(days=5 * 365),
            end_date=self.today - timedelta(days=30),
        )
        email = (
            f"{_email_part(first_name)}.{_email_part(last_name)}{index}"
            f"@{self.faker.free_email_domain()}"
        )
        return Employee.create(
            first_name=first_name,
            last_name=last_name,
            email=email,
            position=position,
            salary_amount=salary,
            salary_currency=currency,
            hired_at=hired_at,
        )

    def load_employees(self, count: Optional[int] = None) -> List[Employee]:
        count = count if count is not None else self.faker.random_int(25, 50)
        employees = [self.build_employee(i) for i in range(count)]
        self.db.add_all(EmployeeModel.from_domain(e) for e in employees)
        self.db.flush()
        return employees

    # Payrolls

    def build_payrolls(self, employee: Employee) -> List[Payroll]:
        payroll_currency, divisor = PAYROLL_CURRENCY_MAP.get(
            employee.salary.currency, ("USD", Decimal("1"))
        )
        monthly = employee.salary.amount / 12 / divisor

        payrolls = []
        first_month = employee.hired_at.replace(day=1)
        for offset in range(self.faker.random_int(3, 6)):
            month_start = add_months(first_month, offset)
            if month_start > self.today:
                break

            gross = GrossSalary(monthly, payroll_currency)
            deductions = Deductions.from_rates(
                gross,
                round(self.faker.random.uniform(0.15, 0.25), 2),
                round(self.faker.random.uniform(0.08, 0.12), 2),
                round(self.faker.random.uniform(0.03, 0.05), 2),
            )
            payroll = Payroll.create(
                employee.id,
                PayrollPeriod.for_month(month_start.year, month_start.month),
                gross,
                deductions,
            )

            roll = self._chance()
            if roll < 0.7:
                payroll.process()
                if self._chance() < 0.8:
                    payroll.pay()
            elif roll >= 0.9:
                payroll.cancel()
            payrolls.append(payroll)
        return payrolls

    # Vacations

    def _pick_period(self, taken: List[VacationPeriod]) -> Optional[VacationPeriod]:
        for _ in range(MAX_PERIOD_ATTEMPTS):
            start = self.faker.date_between(
                start_date=self.today + timedelta(days=1),
                end_date=add_months(self.today, 6),
            )
            end = working_days_end(start, self.faker.random_int(3, 15))
            try:
                period = VacationPeriod.upcoming(start, end, self.today)
            except ValueError:
                continue
            if not any(period.overlaps(existing) for existing in taken):
                return period
        return None

    def build_vacations(self, employee: Employee) -> List[Vacation]:
        if not employee.is_eligible_for_vacation(self.today):
            return []

        vacations: List[Vacation] = []
        for _ in range(self.faker.random_int(2, 8)):
            period = self._pick_period([v.period for v in vacations])
            if period is None:
                continue

            vacation = Vacation.request(
                employee.id, period, self.faker.random_element(VACATION_REASONS)
            )
            roll = self._chance()
            if roll < 0.7:
                vacation.approve()
            elif roll >= 0.9:
                vacation.reject(self.faker.random_element(REJECTION_REASONS))
            vacations.append(vacation)
        return vacations

    # Orchestration

    def purge(self) -> None:
        for model in (VacationModel, PayrollModel, EmployeeModel, UserModel):
            self.db.query(model).delete(synchronize_session=False)
        self.db.commit()
        logger.info("Purged existing HR data")

    def load(self, employee_count: Optional[int] = None, purge: bool = False) -> FixtureSummary:
        if purge:
            self.purge()

        summary = FixtureSummary()
        with log_query_performance("load_fixtures"):
            summary.users = len(self.load_users())
            employees = self.load_employees(employee_count)
            summary.employees = len(employees)

            for employee in employees:
                for payroll in self.build_payrolls(employee):
                    self.db.add(PayrollModel.from_domain(payroll))
                    summary.payrolls += 1
                    key = payroll.status.value
                    summary.payroll_status[key] = summary.payroll_status.get(key, 0) + 1

                for vacation in self.build_vacations(employee):
                    self.db.add(VacationModel.from_domain(vacation))
                    summary.vacations += 1
                    key = vacation.status.value
                    summary.vacation_status[key] = summary.vacation_status.get(key, 0) + 1

            self.db.commit()

        logger.info(
            f"Loaded {summary.users} users, {summary.employees} employees, "
            f"{summary.payrolls} payrolls and {summary.vacations} vacations"
        )
        return summary
