"""
Pydantic schemas for the settings API.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel


class SettingsUpdate(BaseModel):
    """Body of ``PUT /api/settings/{category}``.

    ``settings`` is optional at the schema level so that a missing blob is
    reported as a 400 by the store instead of a validation error.
    """

    settings: Optional[Any] = Field(default=None, description="Opaque settings blob")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"settings": {"workStart": "08:00", "gracePeriodMinutes": 15}}
        },
    )


class SettingResponse(BaseModel):
    """Full stored settings record."""

    category: str
    settings: Any
    updated_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SettingsMap(RootModel[Dict[str, Any]]):
    """Every stored category mapped to its blob."""
