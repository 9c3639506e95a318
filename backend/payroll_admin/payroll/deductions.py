"""
Pay-period deduction diagnostics.

Reports what a payslip would deduct for one employee over a date range:
late minutes from the attendance records and the cash advances disbursed in
the period. The late rule comes from the ``attendance`` settings category
(``workStart``, ``gracePeriodMinutes``, ``weekendDays``); a clock-in later than
the start plus the grace period counts every minute since the start.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..models import ApprovalStatus, Attendance, CashAdvanceRequest, Employee
from ..services import NotFound, SettingsStore
from .rates import effective_hourly_rate

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

DEFAULT_POLICY = {
    "workStart": "08:00",
    "gracePeriodMinutes": 15,
    "weekendDays": ["Saturday", "Sunday"],
}


def _minutes_of_day(value: str) -> int:
    hours, _, minutes = value.partition(":")
    return int(hours) * 60 + int(minutes or 0)


def load_attendance_policy(db: Session) -> Dict[str, Any]:
    """
    Late-arrival policy from the ``attendance`` settings category.

    Keys missing from the stored category, or the whole category when it was
    never seeded, fall back to an 08:00 start with 15 minutes of grace and
    Saturday/Sunday weekends.

    Returns:
        Dictionary with ``work_start`` (minutes after midnight),
        ``grace_minutes`` and ``weekend_days`` (weekday numbers, Monday is 0)
    """
    try:
        stored = SettingsStore(db).get_by_category("attendance")
    except NotFound:
        logger.debug("No attendance settings stored, using defaults")
        stored = {}
    if not isinstance(stored, dict):
        stored = {}

    policy = {**DEFAULT_POLICY, **stored}
    return {
        "work_start": _minutes_of_day(policy["workStart"]),
        "grace_minutes": int(policy["gracePeriodMinutes"] or 0),
        "weekend_days": {
            WEEKDAY_NAMES.index(name) for name in policy["weekendDays"] if name in WEEKDAY_NAMES
        },
    }


def late_minutes(time_in: Optional[datetime], work_start: int, grace_minutes: int) -> int:
    """Minutes late for one clock-in; 0 when absent or within the grace period."""
    if time_in is None:
        return 0
    actual = time_in.hour * 60 + time_in.minute
    if actual > work_start + grace_minutes:
        return actual - work_start
    return 0


def late_deduction(minutes: int, hourly_rate: Optional[float]) -> float:
    """Deduction for ``minutes`` late at the per-minute share of ``hourly_rate``."""
    if not minutes or not hourly_rate:
        return 0.0
    return round(hourly_rate / 60 * minutes, 2)


def count_working_days(start: date, end: date, weekend_days=frozenset({5, 6})) -> int:
    """Days from ``start`` to ``end`` inclusive that are not weekend days."""
    count = 0
    current = start
    while current <= end:
        if current.weekday() not in weekend_days:
            count += 1
        current += timedelta(days=1)
    return count


def cash_advance_blockers(advance: CashAdvanceRequest) -> List[str]:
    """Reasons an advance is not deductible yet; empty when it is."""
    blockers = []
    if advance.manager_approval != ApprovalStatus.APPROVED:
        blockers.append("Manager approval needed")
    if advance.admin_approval != ApprovalStatus.APPROVED:
        blockers.append("Admin approval needed")
    if not advance.is_disbursed:
        blockers.append("Not yet disbursed")
    return blockers


def period_cash_advances(
    db: Session, employee_id: int, start: date, end: date
) -> List[CashAdvanceRequest]:
    """Fully approved advances disbursed between ``start`` and ``end`` (whole days)."""
    return (
        db.query(CashAdvanceRequest)
        .filter(
            CashAdvanceRequest.employee_id == employee_id,
            CashAdvanceRequest.manager_approval == ApprovalStatus.APPROVED,
            CashAdvanceRequest.admin_approval == ApprovalStatus.APPROVED,
            CashAdvanceRequest.is_disbursed.is_(True),
            CashAdvanceRequest.disbursed_at >= datetime.combine(start, time.min),
            CashAdvanceRequest.disbursed_at
            < datetime.combine(end + timedelta(days=1), time.min),
        )
        .order_by(CashAdvanceRequest.disbursed_at)
        .all()
    )


def period_deductions(db: Session, employee: Employee, start: date, end: date) -> Dict:
    """
    Build the deduction report of ``employee`` for ``start`` to ``end`` inclusive.

    Args:
        db: Database session
        employee: Employee to report on
        start: First day of the pay period
        end: Last day of the pay period

    Returns:
        Report dictionary with per-day attendance, late totals, every cash
        advance of the employee (flagged when it counts for the period) and
        the payslip deduction totals

    Raises:
        ValueError: ``start`` is after ``end``
    """
    if start > end:
        raise ValueError("Period start must not be after period end")

    policy = load_attendance_policy(db)
    hourly_rate = effective_hourly_rate(employee)

    records = (
        db.query(Attendance)
        .filter(
            Attendance.employee_id == employee.id,
            Attendance.date >= start,
            Attendance.date <= end,
        )
        .order_by(Attendance.date)
        .all()
    )

    days = []
    for record in records:
        days.append(
            {
                "date": record.date.isoformat(),
                "time_in": record.time_in.isoformat() if record.time_in else None,
                "time_out": record.time_out.isoformat() if record.time_out else None,
                "hours_worked": record.hours_worked or 0.0,
                "overtime_hours": record.overtime_hours or 0.0,
                "late_minutes": late_minutes(
                    record.time_in, policy["work_start"], policy["grace_minutes"]
                ),
            }
        )

    deductible_ids = {a.id for a in period_cash_advances(db, employee.id, start, end)}
    advances = []
    for advance in (
        db.query(CashAdvanceRequest)
        .filter(CashAdvanceRequest.employee_id == employee.id)
        .order_by(CashAdvanceRequest.created_at.desc(), CashAdvanceRequest.id.desc())
        .all()
    ):
        blockers = cash_advance_blockers(advance)
        advances.append(
            {
                "id": advance.id,
                "amount": advance.amount,
                "reason": advance.reason,
                "disbursed_at": (
                    advance.disbursed_at.isoformat() if advance.disbursed_at else None
                ),
                "blockers": blockers,
                "in_period": advance.id in deductible_ids,
            }
        )

    expected_days = count_working_days(start, end, policy["weekend_days"])
    total_late = sum(day["late_minutes"] for day in days)
    deductible = [a for a in advances if a["in_period"]]

    report = {
        "employee_id": employee.id,
        "name": employee.display_name,
        "basic_salary": employee.basic_salary,
        "period_start": start.isoformat(),
        "period_end": end.isoformat(),
        "hourly_rate": hourly_rate,
        "work_start": policy["work_start"],
        "grace_minutes": policy["grace_minutes"],
        "attendance": days,
        "days_present": len(days),
        "expected_working_days": expected_days,
        "days_absent": max(0, expected_days - len(days)),
        "total_hours_worked": round(sum(day["hours_worked"] for day in days), 2),
        "total_overtime_hours": round(sum(day["overtime_hours"] for day in days), 2),
        "total_late_minutes": total_late,
        "late_deduction": late_deduction(total_late, hourly_rate),
        "cash_advances": advances,
        "total_cash_advance": round(sum(a["amount"] for a in deductible), 2),
    }

    logger.info(
        f"Deductions for {employee.display_name} {start}..{end}: "
        f"{total_late} late min, {len(deductible)} cash advance(s)"
    )
    return report
