"""
Inspect an employee's stored pay rates.
"""

import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..models import Employee
from .rates import hourly_rate_from_monthly

logger = logging.getLogger(__name__)


def find_employee(db: Session, first_name: str, last_name: str) -> Optional[Employee]:
    return (
        db.query(Employee)
        .filter(Employee.first_name == first_name, Employee.last_name == last_name)
        .first()
    )


def check_employee_rate(db: Session, first_name: str, last_name: str) -> Optional[Dict]:
    """
    Report an employee's salary fields and a suggested hourly rate.

    A suggestion is only made when no hourly rate is stored and a basic
    salary is available.

    Returns:
        Report dictionary, or None when the employee does not exist
    """
    employee = find_employee(db, first_name, last_name)
    if employee is None:
        logger.warning(f"Employee {last_name}, {first_name} not found")
        return None

    report = {
        "employee_id": employee.id,
        "name": employee.display_name,
        "basic_salary": employee.basic_salary,
        "bi_monthly_salary": employee.bi_monthly_salary,
        "rate_per_hour": employee.rate_per_hour,
        "rate_per_day": employee.rate_per_day,
        "suggested_rate_per_hour": None,
        "basis": None,
    }

    if not employee.rate_per_hour and employee.basic_salary and employee.basic_salary > 0:
        report["suggested_rate_per_hour"] = hourly_rate_from_monthly(employee.basic_salary)
        report["basis"] = (
            f"Monthly Salary ÷ {settings.working_days_per_month} days "
            f"÷ {settings.hours_per_day} hours"
        )

    return report


def apply_suggested_rate(db: Session, employee_id: int, rate_per_hour: float) -> Employee:
    """Persist a suggested hourly rate on the employee."""
    employee = db.get(Employee, employee_id)
    if employee is None:
        raise ValueError(f"Employee {employee_id} not found")

    employee.rate_per_hour = rate_per_hour
    db.commit()
    db.refresh(employee)
    logger.info(f"Set hourly rate of employee {employee_id} to {rate_per_hour:.2f}")
    return employee
