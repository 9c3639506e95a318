"""
Payroll rules and diagnostics.
"""

from .rates import hourly_rate_from_monthly, effective_hourly_rate, overtime_hours, overtime_pay
from .overtime import OvertimeAuditor
from .deductions import late_minutes, late_deduction, period_deductions

__all__ = [
    "hourly_rate_from_monthly",
    "effective_hourly_rate",
    "overtime_hours",
    "overtime_pay",
    "OvertimeAuditor",
    "late_minutes",
    "late_deduction",
    "period_deductions",
]
