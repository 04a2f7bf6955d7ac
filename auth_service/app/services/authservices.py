import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import transaction
from shared.core.exceptions import AuthenticationError, DuplicateEntryError
from shared.core.schemas import UserToken
from shared.models.users import UserRole, Users
from ..schemas.authschemas import AuthenticationResponse, LoginRequest, RegisterRequest
from ..schemas.userschema import UserRead
from .userservices import get_user

logger = logging.getLogger(__name__)


def build_authentication_response(user: Users) -> AuthenticationResponse:
    return AuthenticationResponse(
        access_token=auth.token_for_user(user),
        token_type="bearer",
        user=UserRead.model_validate(user),
    )


def register(db: Session, request: RegisterRequest) -> AuthenticationResponse:
    email = request.email.lower()
    if db.query(Users).filter(func.lower(Users.email) == email).first():
        raise DuplicateEntryError(f"Email '{email}' is already registered.")

    user = Users(
        email=email,
        first_name=request.first_name.strip(),
        last_name=request.last_name.strip(),
        phone=request.phone,
        role=UserRole.GUEST,
        is_active=True,
    )
    user.set_password(request.password)

    with transaction(db):
        db.add(user)
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return build_authentication_response(user)


def login(db: Session, request: LoginRequest) -> AuthenticationResponse:
    user = db.query(Users).filter(
        func.lower(Users.email) == request.email.lower()).first()

    # same message for unknown email and wrong password
    if not user or not user.verify_password(request.password):
        logger.info("Failed login for %s", request.email)
        raise AuthenticationError("Invalid email or password")

    if not user.is_active:
        raise AuthenticationError("User account is disabled")

    return build_authentication_response(user)


def me(db: Session, current_user: UserToken) -> Users:
    return get_user(db, current_user.user_id)
