# backend/modules/payroll/routes/payroll_routes.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from core.auth import CurrentUser, get_current_user, require_admin
from core.database import get_db
from core.pagination import PageParams, hydra_collection, page_params

from ..domain.status import PayrollStatus
from ..schemas.payroll_schemas import (
    PayrollCreate,
    PayrollPatch,
    PayrollRead,
    PayrollUpdate,
)
from ..services.payroll_service import PayrollService

router = APIRouter(prefix="/payrolls", tags=["Payroll"])


@router.get("")
def list_payrolls(
    request: Request,
    params: PageParams = Depends(page_params),
    employee_id: Optional[str] = Query(None, alias="employeeId"),
    payroll_status: Optional[PayrollStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """List payrolls, newest period first."""
    payrolls, total = PayrollService(db).list_payrolls(
        params, employee_id=employee_id, status=payroll_status
    )
    return hydra_collection(
        "Payroll", request.url.path, [PayrollRead.from_domain(p) for p in payrolls], total, params
    )


@router.post(
    "",
    response_model=PayrollRead,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
def create_payroll(
    data: PayrollCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Create a pending payroll. Net salary is calculated from gross salary
    minus taxes, social security and health insurance.

    Raises:
        400: Period overlaps another payroll of the employee
        404: Employee not found
        422: Deductions exceed gross salary, invalid currency or dates
    """
    return PayrollRead.from_domain(PayrollService(db).create_payroll(data))


@router.get("/{payroll_id}", response_model=PayrollRead, response_model_by_alias=True)
def get_payroll(
    payroll_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return PayrollRead.from_domain(PayrollService(db).get_payroll(payroll_id))


@router.put("/{payroll_id}", response_model=PayrollRead, response_model_by_alias=True)
def update_payroll(
    payroll_id: str,
    data: PayrollUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return PayrollRead.from_domain(PayrollService(db).update_payroll(payroll_id, data))


@router.patch("/{payroll_id}", response_model=PayrollRead, response_model_by_alias=True)
def patch_payroll(
    payroll_id: str,
    data: PayrollPatch,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return PayrollRead.from_domain(PayrollService(db).patch_payroll(payroll_id, data))


@router.delete("/{payroll_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payroll(
    payroll_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    PayrollService(db).delete_payroll(payroll_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Lifecycle actions


@router.post("/{payroll_id}/process", response_model=PayrollRead, response_model_by_alias=True)
def process_payroll(
    payroll_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    """pending -> processed"""
    return PayrollRead.from_domain(PayrollService(db).process_payroll(payroll_id))


@router.post("/{payroll_id}/pay", response_model=PayrollRead, response_model_by_alias=True)
def pay_payroll(
    payroll_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    """processed -> paid"""
    return PayrollRead.from_domain(PayrollService(db).pay_payroll(payroll_id))


@router.post("/{payroll_id}/cancel", response_model=PayrollRead, response_model_by_alias=True)
def cancel_payroll(
    payroll_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    """pending -> cancelled"""
    return PayrollRead.from_domain(PayrollService(db).cancel_payroll(payroll_id))
