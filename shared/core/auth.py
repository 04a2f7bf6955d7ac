from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_auth_db as get_db
from shared.core.exceptions import AuthenticationError, PermissionDeniedError
from shared.core.schemas import UserToken
from shared.models.users import UserRole, Users

security = HTTPBearer(auto_error=False)

STAFF_ROLES = {UserRole.ADMIN.value, UserRole.STAFF.value}


def create_access_token(data: dict) -> str:
    payload = data.copy()
    expires = datetime.now(timezone.utc) + \
        timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires
    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def token_for_user(user: Users) -> str:
    return create_access_token({
        "user_id": str(user.id),
        "email": user.email,
        "role": user.role.value if isinstance(user.role, UserRole) else user.role,
        "name": user.full_name,
    })


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        return UserToken(**payload)
    except (JWTError, ValueError):
        raise AuthenticationError("Invalid or expired token")


def validate_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    user_data = verify_token(credentials.credentials)
    try:
        user_id = UUID(user_data.user_id)
    except ValueError:
        raise AuthenticationError("Invalid token structure")

    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise PermissionDeniedError("User is not active. Access denied")

    # role may have changed since the token was issued
    user_data.role = user.role.value if isinstance(user.role, UserRole) else user.role
    return user_data


def allow_staff(current_user: UserToken = Depends(validate_current_token)) -> UserToken:
    if current_user.role not in STAFF_ROLES:
        raise PermissionDeniedError("Access forbidden: staff only")
    return current_user


def allow_admin(current_user: UserToken = Depends(validate_current_token)) -> UserToken:
    if current_user.role != UserRole.ADMIN.value:
        raise PermissionDeniedError("Access forbidden: Admins only")
    return current_user
