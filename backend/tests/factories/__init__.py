# backend/tests/factories/__init__.py

"""
Shared test factories for the HR backend.
"""

from .base import BaseFactory, use_session
from .hr import EmployeeFactory, PayrollFactory, VacationFactory

__all__ = [
    "BaseFactory",
    "use_session",
    "EmployeeFactory",
    "PayrollFactory",
    "VacationFactory",
]
