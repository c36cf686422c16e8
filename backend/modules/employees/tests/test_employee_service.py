# backend/modules/employees/tests/test_employee_service.py

from datetime import date
from decimal import Decimal

import pytest

from core.exceptions import ConflictError, NotFoundError
from core.pagination import PageParams
from modules.employees.domain.employee import Employee
from modules.employees.models.employee_models import EmployeeModel
from modules.employees.schemas.employee_schemas import EmployeeCreate, EmployeePatch
from modules.employees.services.employee_service import EmployeeService
from modules.payroll.domain.money import Deductions, GrossSalary
from modules.payroll.domain.payroll import Payroll
from modules.payroll.domain.period import PayrollPeriod
from modules.payroll.models.payroll_models import PayrollModel


def create_data(**overrides) -> EmployeeCreate:
    data = {
        "first_name": "Ana",
        "last_name": "Garcia",
        "email": "ana.garcia@company.com",
        "position": "QA Engineer",
        "salary_amount": Decimal("48000"),
        "salary_currency": "EUR",
        "hired_at": date(2022, 3, 1),
    }
    data.update(overrides)
    return EmployeeCreate(**data)


class TestEmployeeModelMapping:
    """ORM rows rebuild the same aggregate they were created from."""

    def test_round_trip(self, db_session):
        employee = Employee.create(
            first_name="Ana",
            last_name="Garcia",
            email="ana.garcia@company.com",
            position="QA Engineer",
            salary_amount="48000.50",
            salary_currency="EUR",
            hired_at=date(2022, 3, 1),
        )
        db_session.add(EmployeeModel.from_domain(employee))
        db_session.commit()
        db_session.expire_all()

        restored = db_session.get(EmployeeModel, employee.id).to_domain()

        assert restored.id == employee.id
        assert restored.name == employee.name
        assert restored.email == employee.email
        assert restored.position == employee.position
        assert restored.salary == employee.salary
        assert restored.hired_at == employee.hired_at
        assert restored.created_at == employee.created_at


class TestEmployeeService:
    def test_create_and_get(self, db_session):
        service = EmployeeService(db_session)
        created = service.create_employee(create_data())

        fetched = service.get_employee(created.id)
        assert fetched.full_name == "Ana Garcia"
        assert fetched.salary.amount == Decimal("48000.00")

    def test_duplicate_email_is_case_insensitive(self, db_session):
        service = EmployeeService(db_session)
        service.create_employee(create_data())
        with pytest.raises(ConflictError):
            service.create_employee(create_data(email="ANA.GARCIA@company.com", first_name="Other"))

    def test_get_missing_raises(self, db_session):
        with pytest.raises(NotFoundError):
            EmployeeService(db_session).get_employee("missing")

    def test_list_filters_by_position(self, db_session):
        service = EmployeeService(db_session)
        service.create_employee(create_data())
        service.create_employee(
            create_data(email="bo@company.com", first_name="Bo", position="Data Analyst")
        )

        employees, total = service.list_employees(
            PageParams(page=1, items_per_page=20), position="Data Analyst"
        )
        assert total == 1
        assert employees[0].name.first_name == "Bo"

    def test_patch_salary_keeps_currency(self, db_session):
        service = EmployeeService(db_session)
        created = service.create_employee(create_data())

        updated = service.patch_employee(created.id, EmployeePatch(salary_amount=Decimal("50000")))
        assert updated.salary.amount == Decimal("50000.00")
        assert updated.salary.currency == "EUR"
        assert updated.updated_at is not None

    def test_delete_cascades_to_payrolls(self, db_session):
        service = EmployeeService(db_session)
        created = service.create_employee(create_data())
        gross = GrossSalary(Decimal("4000"), "EUR")
        payroll = Payroll.create(
            created.id, PayrollPeriod.for_month(2024, 1), gross, Deductions.none("EUR")
        )
        db_session.add(PayrollModel.from_domain(payroll))
        db_session.commit()

        service.delete_employee(created.id)

        assert db_session.query(PayrollModel).count() == 0
