from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from shared.core import auth
from shared.core.database import get_auth_db as get_db
from shared.core.schemas import UserToken
from ..schemas import authschemas, userschema
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Hotel Auth"])


@router.post("/register", response_model=authschemas.AuthenticationResponse,
             status_code=status.HTTP_201_CREATED)
def register(
        request: authschemas.RegisterRequest,
        db: Session = Depends(get_db)):
    return authservices.register(db, request)


@router.post("/login", response_model=authschemas.AuthenticationResponse)
def login(
        request: authschemas.LoginRequest,
        db: Session = Depends(get_db)):
    return authservices.login(db, request)


@router.get("/me", response_model=userschema.UserRead)
def me(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.me(db, current_user)
