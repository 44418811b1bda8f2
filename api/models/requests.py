"""
API Request Models
==================

Pydantic models for API request validation. Malformed bodies are rejected
before they reach any handler.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictBool

# passlib refuses to hash longer secrets
MAX_PASSWORD_LENGTH = 4096


class CredentialsRequest(BaseModel):
    """Request body for registration and login."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "pw1"
            }
        }
    )

    username: str = Field(
        ...,
        min_length=1,
        description="Account name, matched exactly"
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=MAX_PASSWORD_LENGTH,
        description="Plain text password (hashed before storage)"
    )


class CreateTaskRequest(BaseModel):
    """Request body for creating a task."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user_id": "550e8400-e29b-41d4-a716-446655440000",
                "task": "buy milk"
            }
        }
    )

    user_id: str = Field(
        ...,
        min_length=1,
        description="Id of the user owning the task"
    )
    task: str = Field(
        ...,
        description="Free-text task description"
    )


class UpdateTaskRequest(BaseModel):
    """Request body for toggling a task's checked state."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "isChecked": True
            }
        }
    )

    isChecked: StrictBool = Field(
        ...,
        description="New value of the checked flag"
    )
