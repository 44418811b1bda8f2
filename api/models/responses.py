"""
API Response Models
===================

Pydantic models for API responses.
"""

from pydantic import BaseModel, ConfigDict, Field

from models import Task, User


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(..., description="Human-readable outcome")


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Login Success!",
                "user_id": "550e8400-e29b-41d4-a716-446655440000",
                "jwtToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
            }
        }
    )

    message: str
    user_id: str = Field(..., description="Id of the logged-in user")
    jwtToken: str = Field(..., description="Bearer token for protected routes")


class TaskCreatedResponse(BaseModel):
    """Response model for task creation."""

    message: str
    task_id: str = Field(..., description="Id of the new task")


class TaskResponse(BaseModel):
    """A task as returned to clients."""

    id: str
    user_id: str
    task: str
    isChecked: bool

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            user_id=task.user_id,
            task=task.task,
            isChecked=task.is_checked
        )


class UserResponse(BaseModel):
    """A user as returned to clients. The password hash is never included."""

    id: str
    username: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username)


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Short, fixed error message")
