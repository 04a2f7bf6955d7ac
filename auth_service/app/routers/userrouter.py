from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from shared.core import auth
from shared.core.database import get_auth_db as get_db
from shared.core.schemas import UserToken
from ..schemas import userschema
from ..services import userservices

router = APIRouter(prefix="/api/users", tags=["Hotel Users"])


@router.get("", response_model=List[userschema.UserRead])
def get_users(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_staff)):
    return userservices.get_users(db)


@router.get("/{user_id}", response_model=userschema.UserRead)
def get_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_staff)):
    return userservices.get_user(db, user_id)


@router.post("", response_model=userschema.UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
        new_user: userschema.UserCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    return userservices.create_user(db, new_user)


@router.patch("/{user_id}", response_model=userschema.UserRead)
def update_user(
        user_id: UUID,
        user_update: userschema.UserUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    return userservices.update_user(db, user_id, user_update)


@router.delete("/{user_id}")
def delete_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    return userservices.delete_user(db, user_id)
