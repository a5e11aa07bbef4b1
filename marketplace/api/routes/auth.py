from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from marketplace.db.base import get_db
from marketplace.db.models.user import User
from marketplace.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from marketplace.services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        phone=user.phone,
        is_vendor=bool(user.is_vendor),
        profile_photo=user.profile_photo,
        bio=user.bio,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, request: Request, db: Session = Depends(get_db)):
    user, token = AccountService(db, request.app.state.settings).register(payload)
    return AuthResponse(message="User created successfully", user=user_response(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)):
    user, token = AccountService(db, request.app.state.settings).login(payload)
    return AuthResponse(message="Login successful", user=user_response(user), token=token)
