"""
User Listing Endpoint
=====================
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_user_registry
from api.models.responses import UserResponse
from core.storage import storage_operation
from core.user_registry import UserRegistry

router = APIRouter()


@router.get("/users/", response_model=list[UserResponse])
async def list_users(registry: UserRegistry = Depends(get_user_registry)):
    """List every registered account (ids and usernames only)."""
    async with storage_operation("Failed to fetch users"):
        users = await registry.list_users()

    return [UserResponse.from_user(u) for u in users]
