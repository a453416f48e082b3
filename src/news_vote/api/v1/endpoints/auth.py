# src/news_vote/api/v1/endpoints/auth.py
"""Authentication endpoints: registration and password login."""

from fastapi import APIRouter, status

from news_vote.core.security import create_access_token
from news_vote.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from news_vote.services import users as user_service

from ..dependencies import SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: SessionDep) -> UserResponse:
    """Create a new account."""
    user = user_service.register_user(
        db,
        email=payload.email,
        password=payload.password,
        nickname=payload.nickname,
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange email and password for a bearer token."""
    user = user_service.authenticate(db, payload.email, payload.password)
    token = create_access_token(user.id, extra_claims={"role": user.role})
    return LoginResponse(access_token=token, token_type="bearer", user_id=user.id)
