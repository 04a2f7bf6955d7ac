import logging
from typing import List
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.database import transaction
from shared.core.exceptions import DuplicateEntryError, NotFoundError, ValidationError
from shared.models.users import Users
from ..schemas.userschema import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _ensure_unique_email(db: Session, email: str, exclude_id: UUID = None):
    query = db.query(Users).filter(func.lower(Users.email) == email.lower())
    if exclude_id:
        query = query.filter(Users.id != exclude_id)
    if query.first():
        raise DuplicateEntryError(f"Email '{email}' is already registered.")


def get_users(db: Session) -> List[Users]:
    return db.query(Users).order_by(Users.created_at.desc()).all()


def get_user(db: Session, user_id) -> Users:
    if not isinstance(user_id, UUID):
        try:
            user_id = UUID(str(user_id))
        except ValueError:
            raise ValidationError(f"Invalid user id '{user_id}'")

    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def create_user(db: Session, user: UserCreate) -> Users:
    _ensure_unique_email(db, user.email)

    user_instance = Users(
        email=user.email.lower(),
        first_name=user.first_name.strip(),
        last_name=user.last_name.strip(),
        phone=user.phone,
        role=user.role,
        is_active=user.is_active,
    )
    user_instance.set_password(user.password)

    with transaction(db):
        db.add(user_instance)
    db.refresh(user_instance)

    logger.info("Created %s user %s", user_instance.role.value, user_instance.id)
    return user_instance


def update_user(db: Session, user_id: UUID, user_update: UserUpdate) -> Users:
    user_instance = get_user(db, user_id)
    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in update_data:
        _ensure_unique_email(db, update_data["email"], exclude_id=user_instance.id)
        update_data["email"] = update_data["email"].lower()

    password = update_data.pop("password", None)

    with transaction(db):
        for key, value in update_data.items():
            setattr(user_instance, key, value)
        if password:
            user_instance.set_password(password)

    db.refresh(user_instance)
    return user_instance


def delete_user(db: Session, user_id: UUID):
    user_instance = get_user(db, user_id)
    with transaction(db):
        db.delete(user_instance)
    logger.info("Deleted user %s", user_id)
    return {"message": "User deleted successfully"}
