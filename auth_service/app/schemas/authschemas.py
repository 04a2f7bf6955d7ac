from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from .userschema import UserRead


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str
    last_name: str
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthenticationResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
