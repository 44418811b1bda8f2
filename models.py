"""
Domain Models for Task Tracker
==============================

Core records persisted in the document store. These models are "pure":
they have no dependencies on the web framework or the storage client, so
the stores and the API layer can share them.
"""

import uuid
from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    """Generate an opaque, unique document identifier."""
    return str(uuid.uuid4())


class User(BaseModel):
    """
    A registered account.

    Attributes:
        id: System-generated identifier
        username: Unique login name
        password: bcrypt hash of the password (never the plain text)
    """
    id: str = Field(default_factory=new_id)
    username: str
    password: str


class Task(BaseModel):
    """
    A single to-do item owned by a user.

    `isChecked` keeps the wire name used by clients; it starts out False and
    flips freely between the two states.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    user_id: str
    task: str
    is_checked: bool = Field(default=False, alias="isChecked")

    def to_document(self) -> dict:
        """Serialize for storage using the public field names."""
        return self.model_dump(by_alias=True)
