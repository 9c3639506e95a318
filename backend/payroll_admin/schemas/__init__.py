"""
Pydantic schemas package.
"""

from .auth import LoginRequest, TokenResponse, RefreshTokenRequest
from .user import UserResponse
from .settings import SettingsUpdate, SettingResponse, SettingsMap

__all__ = [
    # Auth
    "LoginRequest",
    "TokenResponse",
    "RefreshTokenRequest",
    # User
    "UserResponse",
    # Settings
    "SettingsUpdate",
    "SettingResponse",
    "SettingsMap",
]
