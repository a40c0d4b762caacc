"""Auth Routes — registration and login (the only unauthenticated business routes)."""

from fastapi import APIRouter, Depends, status

from introhub.api.dependencies import get_auth_service
from introhub.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from introhub.schemas.user import UserResponse
from introhub.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest, auth: AuthService = Depends(get_auth_service),
):
    token, user = await auth.register(body)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest, auth: AuthService = Depends(get_auth_service),
):
    token, user = await auth.login(body)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))
