import uuid
from enum import Enum as PyEnum

from passlib.context import CryptContext
from sqlalchemy import TIMESTAMP, Boolean, Column, Enum, String, func
from sqlalchemy.dialects.postgresql import UUID
from ..core.database import AuthBase

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class UserRole(str, PyEnum):
    ADMIN = "admin"
    STAFF = "staff"
    GUEST = "guest"


class Users(AuthBase):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(200), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role_enum", native_enum=False,
             values_callable=lambda x: [e.value for e in x]),
        default=UserRole.GUEST,
        nullable=False,
    )
    # whatsapp messages are matched on this column
    phone = Column(String(20), nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return bcrypt_context.verify(password, self.password)
