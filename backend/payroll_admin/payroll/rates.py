"""
Pay-rate rules.

The hourly rate is derived from the monthly basic salary as
``salary / working days per month / hours per day`` (22 and 8 by default).
Overtime pay is ``hours * hourly rate * multiplier`` with a 1.25 default
multiplier for regular overtime.
"""

from datetime import datetime
from typing import Optional

from ..config import settings


def hourly_rate_from_monthly(
    monthly_salary: float,
    working_days: Optional[int] = None,
    hours_per_day: Optional[int] = None,
) -> float:
    """
    Derive an hourly rate from a monthly salary.

    Args:
        monthly_salary: Monthly basic salary, must be positive
        working_days: Working days per month (defaults to configuration)
        hours_per_day: Paid hours per day (defaults to configuration)

    Returns:
        Hourly rate rounded to two decimals

    Raises:
        ValueError: salary or divisors are not positive
    """
    working_days = working_days or settings.working_days_per_month
    hours_per_day = hours_per_day or settings.hours_per_day

    if monthly_salary is None or monthly_salary <= 0:
        raise ValueError("Monthly salary must be positive to derive an hourly rate")
    if working_days <= 0 or hours_per_day <= 0:
        raise ValueError("Working days and hours per day must be positive")

    return round(monthly_salary / working_days / hours_per_day, 2)


def effective_hourly_rate(employee) -> Optional[float]:
    """Stored hourly rate when set, otherwise derived from the basic salary."""
    if employee.rate_per_hour:
        return employee.rate_per_hour
    if employee.basic_salary and employee.basic_salary > 0:
        return hourly_rate_from_monthly(employee.basic_salary)
    return None


def overtime_hours(start: datetime, end: Optional[datetime]) -> float:
    """Hours between ``start`` and ``end``; 0.0 when ``end`` is missing or not after ``start``."""
    if end is None or end <= start:
        return 0.0
    return (end - start).total_seconds() / 3600


def overtime_pay(hours: float, hourly_rate: float, multiplier: Optional[float] = None) -> float:
    """
    Pay for ``hours`` of overtime.

    Args:
        hours: Overtime duration in hours
        hourly_rate: Employee hourly rate
        multiplier: Overtime multiplier, None or 0 means the configured default

    Returns:
        Pay rounded to two decimals
    """
    multiplier = multiplier or settings.default_overtime_multiplier
    return round((hours or 0) * (hourly_rate or 0) * multiplier, 2)
