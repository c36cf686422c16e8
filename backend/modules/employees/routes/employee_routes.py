# backend/modules/employees/routes/employee_routes.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from core.auth import CurrentUser, get_current_user
from core.config import settings
from core.database import get_db
from core.pagination import PageParams, hydra_collection, page_params

from ..schemas.employee_schemas import (
    EmployeeCreate,
    EmployeePatch,
    EmployeeRead,
    EmployeeUpdate,
)
from ..services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["Employees"])


def _read(employee) -> EmployeeRead:
    return EmployeeRead.from_domain(employee, settings.vacation_eligibility_months)


@router.get("")
def list_employees(
    request: Request,
    params: PageParams = Depends(page_params),
    search: Optional[str] = Query(None, description="Match first name, last name or email"),
    position: Optional[str] = Query(None, description="Exact position title"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """List employees, 20 per page by default."""
    employees, total = EmployeeService(db).list_employees(params, search=search, position=position)
    return hydra_collection(
        "Employee", request.url.path, [_read(e) for e in employees], total, params
    )


@router.post(
    "",
    response_model=EmployeeRead,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
def create_employee(
    data: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Create an employee.

    Raises:
        400: Email already used by another employee
        422: Invalid payload (e.g. non-positive salary)
    """
    return _read(EmployeeService(db).create_employee(data))


@router.get("/{employee_id}", response_model=EmployeeRead, response_model_by_alias=True)
def get_employee(
    employee_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return _read(EmployeeService(db).get_employee(employee_id))


@router.put("/{employee_id}", response_model=EmployeeRead, response_model_by_alias=True)
def update_employee(
    employee_id: str,
    data: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return _read(EmployeeService(db).update_employee(employee_id, data))


@router.patch("/{employee_id}", response_model=EmployeeRead, response_model_by_alias=True)
def patch_employee(
    employee_id: str,
    data: EmployeePatch,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return _read(EmployeeService(db).patch_employee(employee_id, data))


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    EmployeeService(db).delete_employee(employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
