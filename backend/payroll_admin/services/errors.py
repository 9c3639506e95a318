"""
Errors raised by the settings store.

The HTTP layer maps each class to a status code and a generic message;
details stay in the logs.
"""

from typing import Optional


class SettingsStoreError(Exception):
    """Base class for settings store failures."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str, operation: str, category: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
        self.category = category


class InvalidInput(SettingsStoreError):
    """The caller supplied missing or malformed data."""

    status_code = 400
    public_message = "Settings data is required"


class NotFound(SettingsStoreError):
    """The requested category has never been written."""

    status_code = 404
    public_message = "Settings category not found"


class StorageFailure(SettingsStoreError):
    """The database rejected or failed the operation."""

    status_code = 500

    @property
    def public_message(self) -> str:
        if self.operation == "upsert":
            return "Failed to update settings"
        return "Failed to fetch settings"
