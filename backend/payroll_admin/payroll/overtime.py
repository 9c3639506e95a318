"""
Audit and repair overtime requests.

Approved overtime can be left open (no end time) when the employee never
closed it, or saved with zero pay when the employee had no hourly rate at the
time. The helpers here find those requests, close them from the attendance
clock-out of the same day, and recompute missing pay.
"""

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from typing import Dict, List, Optional
import logging

from ..models import Attendance, OvertimeRequest, OvertimeStatus
from .rates import effective_hourly_rate, overtime_hours, overtime_pay

logger = logging.getLogger(__name__)


class OvertimeAuditor:
    """Find and fix incomplete overtime requests."""

    @staticmethod
    def find_attendance(db: Session, overtime: OvertimeRequest) -> Optional[Attendance]:
        """Attendance record of the same employee on the overtime date."""
        return (
            db.query(Attendance)
            .filter(
                Attendance.employee_id == overtime.employee_id,
                Attendance.date == overtime.date,
            )
            .first()
        )

    @staticmethod
    def _item(overtime: OvertimeRequest) -> Dict:
        return {
            "overtime_id": overtime.id,
            "employee_id": overtime.employee_id,
            "employee": overtime.employee.display_name,
            "date": overtime.date.isoformat(),
            "start_time": overtime.start_time.isoformat(),
            "end_time": overtime.end_time.isoformat() if overtime.end_time else None,
            "total_hours": overtime.total_hours,
            "overtime_pay": overtime.overtime_pay,
            "status": overtime.status.value,
        }

    @staticmethod
    def find_incomplete(db: Session) -> List[Dict]:
        """
        List approved overtime requests with missing hours or pay.

        Each finding carries a ``proposed_fix`` (hours and pay computed from
        the attendance clock-out) when one can be derived, and an ``issue``
        describing why not otherwise.

        Returns:
            Findings, newest overtime date first
        """
        overtimes = (
            db.query(OvertimeRequest)
            .options(joinedload(OvertimeRequest.employee))
            .filter(
                OvertimeRequest.status == OvertimeStatus.APPROVED,
                or_(
                    OvertimeRequest.total_hours.is_(None),
                    OvertimeRequest.total_hours == 0,
                    OvertimeRequest.overtime_pay.is_(None),
                    OvertimeRequest.overtime_pay == 0,
                ),
            )
            .order_by(OvertimeRequest.date.desc(), OvertimeRequest.id.desc())
            .all()
        )
        logger.info(f"Found {len(overtimes)} approved overtime request(s) missing hours or pay")

        findings = []
        for overtime in overtimes:
            finding = OvertimeAuditor._item(overtime)
            finding["proposed_fix"] = None
            finding["issue"] = None

            attendance = OvertimeAuditor.find_attendance(db, overtime)
            if attendance is None or attendance.time_out is None:
                finding["issue"] = "No attendance record or time-out found"
            else:
                hours = overtime_hours(overtime.start_time, attendance.time_out)
                if hours > 0:
                    rate = effective_hourly_rate(overtime.employee) or 0.0
                    finding["proposed_fix"] = {
                        "end_time": attendance.time_out.isoformat(),
                        "total_hours": round(hours, 2),
                        "overtime_pay": overtime_pay(hours, rate, overtime.overtime_rate),
                    }
                else:
                    finding["issue"] = (
                        f"Clock-out ({attendance.time_out.strftime('%H:%M')}) is before OT start"
                    )
            findings.append(finding)

        return findings

    @staticmethod
    def complete_from_attendance(db: Session, dry_run: bool = False) -> Dict:
        """
        Close approved overtime requests that have no end time.

        The end time is taken from the attendance clock-out of the same day;
        hours and pay are computed from it. Requests without a clock-out, or
        whose clock-out is not after the overtime start, are skipped.

        Args:
            db: Database session
            dry_run: Compute the changes without saving them

        Returns:
            Summary with ``total``, ``updated``, ``skipped`` and per-request ``items``
        """
        overtimes = (
            db.query(OvertimeRequest)
            .options(joinedload(OvertimeRequest.employee))
            .filter(
                OvertimeRequest.status == OvertimeStatus.APPROVED,
                OvertimeRequest.end_time.is_(None),
            )
            .order_by(OvertimeRequest.date.desc(), OvertimeRequest.id.desc())
            .all()
        )

        summary = {"total": len(overtimes), "updated": 0, "skipped": 0, "items": []}

        try:
            for overtime in overtimes:
                item = OvertimeAuditor._item(overtime)
                attendance = OvertimeAuditor.find_attendance(db, overtime)

                if attendance is None or attendance.time_out is None:
                    item["action"] = "skipped"
                    item["reason"] = "No attendance record with clock-out time found"
                    summary["skipped"] += 1
                    summary["items"].append(item)
                    continue

                hours = overtime_hours(overtime.start_time, attendance.time_out)
                if hours <= 0:
                    item["action"] = "skipped"
                    item["reason"] = "Clock-out time is before or equal to overtime start time"
                    summary["skipped"] += 1
                    summary["items"].append(item)
                    continue

                rate = effective_hourly_rate(overtime.employee) or 0.0
                pay = overtime_pay(hours, rate, overtime.overtime_rate)

                if not dry_run:
                    overtime.end_time = attendance.time_out
                    overtime.total_hours = hours
                    overtime.overtime_pay = pay

                item.update(
                    {
                        "action": "updated",
                        "reason": None,
                        "end_time": attendance.time_out.isoformat(),
                        "total_hours": round(hours, 2),
                        "hourly_rate": rate,
                        "overtime_pay": pay,
                    }
                )
                summary["updated"] += 1
                summary["items"].append(item)

            if not dry_run:
                db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to complete overtime requests: {e}")
            raise

        logger.info(
            f"Completed {summary['updated']} overtime request(s), skipped {summary['skipped']}"
            + (" (dry run)" if dry_run else "")
        )
        return summary

    @staticmethod
    def recalculate_pay(db: Session, dry_run: bool = False) -> Dict:
        """
        Recompute pay for overtime requests that have hours but no pay.

        Requests whose employee has neither an hourly rate nor a basic salary
        are skipped.

        Args:
            db: Database session
            dry_run: Compute the changes without saving them

        Returns:
            Summary with ``total``, ``updated``, ``skipped`` and per-request ``items``
        """
        overtimes = (
            db.query(OvertimeRequest)
            .options(joinedload(OvertimeRequest.employee))
            .filter(
                OvertimeRequest.total_hours.isnot(None),
                or_(OvertimeRequest.overtime_pay.is_(None), OvertimeRequest.overtime_pay == 0),
            )
            .order_by(OvertimeRequest.date.desc(), OvertimeRequest.id.desc())
            .all()
        )

        summary = {"total": len(overtimes), "updated": 0, "skipped": 0, "items": []}

        try:
            for overtime in overtimes:
                item = OvertimeAuditor._item(overtime)
                rate = effective_hourly_rate(overtime.employee)

                if not rate:
                    item["action"] = "skipped"
                    item["reason"] = "Employee has no hourly rate set"
                    summary["skipped"] += 1
                    summary["items"].append(item)
                    continue

                pay = overtime_pay(overtime.total_hours, rate, overtime.overtime_rate)
                if not dry_run:
                    overtime.overtime_pay = pay

                item.update(
                    {"action": "updated", "reason": None, "hourly_rate": rate, "overtime_pay": pay}
                )
                summary["updated"] += 1
                summary["items"].append(item)

            if not dry_run:
                db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to recalculate overtime pay: {e}")
            raise

        logger.info(
            f"Recalculated pay for {summary['updated']} overtime request(s), "
            f"skipped {summary['skipped']}" + (" (dry run)" if dry_run else "")
        )
        return summary
