"""
Seeding and migration helpers.
"""

from .seed import DEFAULT_SETTINGS, seed_admin_user, seed_default_settings
from .migrations import add_work_schedule_column

__all__ = [
    "DEFAULT_SETTINGS",
    "seed_admin_user",
    "seed_default_settings",
    "add_work_schedule_column",
]
