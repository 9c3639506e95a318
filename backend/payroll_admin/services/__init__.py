"""
Service layer package.
"""

from .errors import SettingsStoreError, InvalidInput, NotFound, StorageFailure
from .settings_store import SettingsStore

__all__ = [
    "SettingsStore",
    "SettingsStoreError",
    "InvalidInput",
    "NotFound",
    "StorageFailure",
]
