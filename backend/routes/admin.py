# backend/routes/admin.py
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.user import AdminUserCreate, UserUpdate, UserResponse
from services.user_service import UserService
from utils.audit import write_log, client_ip
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/users", tags=["Admin"])


# List all users (Admin only)
@router.get("", response_model=List[UserResponse])
def get_all_users(db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return UserService(db).list_users()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return UserService(db).get_user(user_id)


# Create an account on someone's behalf (Admin only)
@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: AdminUserCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    user = UserService(db).create_user(
        payload.name, payload.email, payload.password,
        is_admin=payload.is_admin, is_active=payload.is_active,
    )
    write_log(db, user_id=current_user.id, action="USER_CREATE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"id": user.id, "email": user.email})
    return user


# Update name, email, admin or active flag (Admin only)
@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    user = UserService(db).update_user(user_id, payload.model_dump(exclude_unset=True))
    write_log(db, user_id=current_user.id, action="USER_UPDATE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"id": user.id})
    return user


# Delete a user account with its cart (Admin only)
@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    UserService(db).delete_user(user_id, acting_user_id=current_user.id)
    write_log(db, user_id=current_user.id, action="USER_DELETE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"id": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
