# backend/modules/vacations/routes/vacation_routes.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from core.auth import CurrentUser, get_current_user, require_admin
from core.database import get_db
from core.pagination import PageParams, hydra_collection, page_params

from ..domain.status import VacationStatus
from ..schemas.vacation_schemas import (
    VacationCreate,
    VacationPatch,
    VacationRead,
    VacationRejection,
    VacationUpdate,
)
from ..services.vacation_service import VacationService

router = APIRouter(prefix="/vacations", tags=["Vacations"])


@router.get("")
def list_vacations(
    request: Request,
    params: PageParams = Depends(page_params),
    employee_id: Optional[str] = Query(None, alias="employeeId"),
    vacation_status: Optional[VacationStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    vacations, total = VacationService(db).list_vacations(
        params, employee_id=employee_id, status=vacation_status
    )
    return hydra_collection(
        "Vacation", request.url.path, [VacationRead.from_domain(v) for v in vacations], total, params
    )


@router.post(
    "",
    response_model=VacationRead,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
def request_vacation(
    data: VacationCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Request a vacation. It starts as pending.

    Raises:
        400: Employee has less than the minimum months of service
        404: Employee not found
        422: Dates in the past, reversed or longer than a year
    """
    return VacationRead.from_domain(VacationService(db).request_vacation(data))


@router.get("/{vacation_id}", response_model=VacationRead, response_model_by_alias=True)
def get_vacation(
    vacation_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return VacationRead.from_domain(VacationService(db).get_vacation(vacation_id))


@router.put("/{vacation_id}", response_model=VacationRead, response_model_by_alias=True)
def update_vacation(
    vacation_id: str,
    data: VacationUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return VacationRead.from_domain(VacationService(db).update_vacation(vacation_id, data))


@router.patch("/{vacation_id}", response_model=VacationRead, response_model_by_alias=True)
def patch_vacation(
    vacation_id: str,
    data: VacationPatch,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return VacationRead.from_domain(VacationService(db).patch_vacation(vacation_id, data))


@router.delete("/{vacation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vacation(
    vacation_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    VacationService(db).delete_vacation(vacation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{vacation_id}/approve", response_model=VacationRead, response_model_by_alias=True)
def approve_vacation(
    vacation_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return VacationRead.from_domain(VacationService(db).approve_vacation(vacation_id))


@router.post("/{vacation_id}/reject", response_model=VacationRead, response_model_by_alias=True)
def reject_vacation(
    vacation_id: str,
    data: VacationRejection,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return VacationRead.from_domain(VacationService(db).reject_vacation(vacation_id, data.reason))


@router.post("/{vacation_id}/cancel", response_model=VacationRead, response_model_by_alias=True)
def cancel_vacation(
    vacation_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Withdraw a pending request"""
    return VacationRead.from_domain(VacationService(db).cancel_vacation(vacation_id))
