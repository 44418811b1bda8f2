"""
Authentication Endpoints
========================

User registration and login.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_user_registry
from api.models.requests import CredentialsRequest
from api.models.responses import LoginResponse, MessageResponse
from core.storage import storage_operation
from core.user_registry import UserRegistry

router = APIRouter()


@router.post("/register", response_model=MessageResponse)
async def register(
    request: CredentialsRequest,
    registry: UserRegistry = Depends(get_user_registry)
):
    """
    Register a new account. Does not log the user in.

    Raises:
        400: Username already exists
        500: Storage failure
    """
    async with storage_operation("Registration failed"):
        await registry.register(request.username, request.password)

    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    request: CredentialsRequest,
    registry: UserRegistry = Depends(get_user_registry)
):
    """
    Exchange credentials for a session token.

    Raises:
        400: Invalid User / Invalid Password
        500: Storage failure
    """
    async with storage_operation("Login failed"):
        result = await registry.login(request.username, request.password)

    return LoginResponse(
        message="Login Success!",
        user_id=result.user.id,
        jwtToken=result.token
    )
