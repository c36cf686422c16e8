# backend/modules/auth/routes/user_routes.py

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from core.auth import CurrentUser, require_admin
from core.database import get_db
from core.exceptions import BusinessRuleError
from core.pagination import PageParams, hydra_collection, page_params

from ..schemas.auth_schemas import UserCreate, UserPatch, UserRead, UserUpdate
from ..services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
def list_users(
    request: Request,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    users, total = UserService(db).list_users(params)
    return hydra_collection(
        "User", request.url.path, [UserRead.from_domain(u) for u in users], total, params
    )


@router.post(
    "", response_model=UserRead, response_model_by_alias=True, status_code=status.HTTP_201_CREATED
)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return UserRead.from_domain(UserService(db).create_user(data))


@router.get("/{user_id}", response_model=UserRead, response_model_by_alias=True)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return UserRead.from_domain(UserService(db).get_user(user_id))


@router.put("/{user_id}", response_model=UserRead, response_model_by_alias=True)
def update_user(
    user_id: str,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return UserRead.from_domain(UserService(db).update_user(user_id, data))


@router.patch("/{user_id}", response_model=UserRead, response_model_by_alias=True)
def patch_user(
    user_id: str,
    data: UserPatch,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return UserRead.from_domain(UserService(db).patch_user(user_id, data))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    if user_id == current_user.id:
        raise BusinessRuleError("You cannot delete your own account")
    UserService(db).delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
