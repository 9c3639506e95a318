"""
Database models package.
"""

from .user import User, UserRole
from .settings import SystemSetting
from .employee import Employee
from .attendance import Attendance
from .overtime import OvertimeRequest, OvertimeStatus
from .cash_advance import CashAdvanceRequest, CashAdvanceStatus, ApprovalStatus

__all__ = [
    "User",
    "UserRole",
    "SystemSetting",
    "Employee",
    "Attendance",
    "OvertimeRequest",
    "OvertimeStatus",
    "CashAdvanceRequest",
    "CashAdvanceStatus",
    "ApprovalStatus",
]
