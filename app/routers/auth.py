"""
Admin authentication API endpoints.
Sign-in is delegated to the auth provider; tokens are only issued to admins.
"""

from fastapi import APIRouter, Depends, status

from app.services.auth import AdminContext, AuthService
from app.schemas.auth import LoginRequest, LoginResponse, ProtectedResponse
from app.schemas.error import get_error_responses
from app.utils.dependencies import get_auth_service, get_current_admin


router = APIRouter(prefix="/admin", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Admin login",
    description="Authenticate an admin with email and password, returns provider tokens",
    responses=get_error_responses(400, 401, 403, 500)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate an admin and return the provider session tokens.

    Args:
        login_data: Login credentials (email and password)
        auth_service: Authentication service

    Returns:
        access_token, refresh_token and the provider user object

    Raises:
        InvalidCredentialsError: If credentials are invalid
        ForbiddenError: If the account is not an admin
    """
    return await auth_service.login(email=login_data.email, password=login_data.password)


@router.get(
    "/protected",
    response_model=ProtectedResponse,
    summary="Admin access check",
    description="Returns the caller's identity and admin flag when the token grants admin access",
    responses=get_error_responses(401, 403, 500)
)
async def protected(admin: AdminContext = Depends(get_current_admin)):
    return {
        "message": "Access granted to protected route",
        "user": admin.identity.raw,
        "admin": admin.to_dict()
    }
