"""
Seed data: the default admin account and the default settings categories.
"""

import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from ..config import settings
from ..models import SystemSetting, User, UserRole
from ..services.settings_store import SettingsStore

logger = logging.getLogger(__name__)


DEFAULT_SETTINGS: List[Dict[str, Any]] = [
    {
        "category": "company",
        "settings": {
            "name": "Company Name",
            "address": "",
            "phone": "",
            "email": "",
            "taxId": "",
            "logoUrl": None,
        },
    },
    {
        "category": "payroll",
        "settings": {
            "payPeriod": "SEMI_MONTHLY",
            "payDates": [15, 30],
            # Annual taxable income brackets: 0-250k, -400k, -800k, -2M, -8M, above
            "taxRates": {
                "bracket1": 0,
                "bracket2": 15,
                "bracket3": 20,
                "bracket4": 25,
                "bracket5": 30,
                "bracket6": 35,
            },
            "sssRate": {"employee": 4.5, "employer": 9.5, "ec": 1.0},
            "philHealthRate": {"employee": 2.0, "employer": 2.0},
            "pagIbigRate": {"employee": 2.0, "employer": 2.0},
            "overtimeMultipliers": {
                "regular": 1.25,
                "restDay": 1.3,
                "specialHoliday": 1.3,
                "regularHoliday": 2.0,
                "restDayHoliday": 2.6,
            },
            "lateDeduction": {"perMinute": 5.0, "perHour": 50.0, "enabled": False},
            "thirteenthMonthMethod": "BASIC_SALARY",
        },
    },
    {
        "category": "leave",
        "settings": {
            "vacationLeave": 15,
            "sickLeave": 15,
            "emergencyLeave": 3,
            "maternityLeave": 105,
            "paternityLeave": 7,
            "accrualMethod": "ANNUAL",
            "allowCarryOver": True,
            "maxCarryOver": 5,
        },
    },
    {
        "category": "attendance",
        "settings": {
            "workStart": "08:00",
            "workEnd": "17:00",
            "gracePeriodMinutes": 15,
            "requireOTApproval": True,
            "weekendDays": ["Saturday", "Sunday"],
        },
    },
    {
        "category": "system",
        "settings": {
            "dateFormat": "MM/DD/YYYY",
            "currency": "PHP",
            "timezone": "Asia/Manila",
            "emailNotifications": True,
            "sessionTimeout": 30,
        },
    },
]


def seed_admin_user(db: Session) -> Tuple[User, bool]:
    """
    Create the default admin account unless it already exists.

    An existing account is left untouched, including its password.

    Returns:
        The admin user and whether it was created
    """
    from ..auth.security import get_password_hash

    admin_user = db.query(User).filter(User.username == settings.default_admin_username).first()
    if admin_user:
        logger.info(f"✓ Admin user already exists: {settings.default_admin_username}")
        return admin_user, False

    admin_user = User(
        username=settings.default_admin_username,
        email=settings.default_admin_email,
        full_name="System Admin",
        hashed_password=get_password_hash(settings.default_admin_password),
        role=UserRole.ADMIN,
        must_change_password=True,
        is_active=True,
    )
    db.add(admin_user)
    db.commit()
    db.refresh(admin_user)
    logger.info(f"✓ Default admin user created: {settings.default_admin_username}")
    return admin_user, True


def seed_default_settings(db: Session, keep_existing: bool = False) -> List[str]:
    """
    Upsert the default settings categories.

    Args:
        db: Database session
        keep_existing: Leave categories that are already stored alone instead
            of resetting them to the defaults

    Returns:
        Categories that were written
    """
    store = SettingsStore(db)
    written = []
    for default in DEFAULT_SETTINGS:
        category = default["category"]
        if keep_existing and db.get(SystemSetting, category) is not None:
            logger.info(f"Keeping existing {category} settings")
            continue
        store.upsert(category, default["settings"])
        written.append(category)
        logger.info(f"✓ Seeded {category} settings")
    return written
