"""
Pydantic schemas for users.
"""

from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from enum import Enum
from typing import Optional


class UserResponse(BaseModel):
    """User response schema."""

    id: int
    username: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: str
    is_active: bool
    must_change_password: bool
    created_at: datetime
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("role", mode="before")
    @classmethod
    def role_value(cls, v):
        """Expose the enum value rather than the enum member."""
        return v.value if isinstance(v, Enum) else v
