# backend/modules/models_registry.py

"""
Import every ORM model so relationship() strings resolve and
Base.metadata knows all tables before create_all().
"""

from modules.auth.models.user_models import UserModel
from modules.employees.models.employee_models import EmployeeModel
from modules.payroll.models.payroll_models import PayrollModel
from modules.vacations.models.vacation_models import VacationModel

__all__ = ["UserModel", "EmployeeModel", "PayrollModel", "VacationModel"]
