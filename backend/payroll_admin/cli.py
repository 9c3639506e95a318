#!/usr/bin/env python3
"""
Payroll Admin command line tool.

Seeds the database, runs the one-off migration and inspects or repairs
employee pay rates and overtime requests.

Usage:
    payroll-admin seed                          # Create tables and the default admin user
    payroll-admin seed-settings                 # Upsert the default settings categories
    payroll-admin migrate                       # Add employees.work_schedule if missing
    payroll-admin check-rate pds lab            # Show an employee's pay rates
    payroll-admin check-deductions test lab --start 2025-12-01 --end 2025-12-15
    payroll-admin check-overtime --xlsx a.xlsx  # List approved overtime missing hours/pay
    payroll-admin complete-overtime --dry-run   # Close open overtime from attendance
    payroll-admin recalculate-overtime          # Recompute zero/null overtime pay
"""

import argparse
import logging
import sys
from datetime import date

from .config import settings, configure_logging
from .database import Base, SessionLocal

logger = logging.getLogger(__name__)


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def print_header(text):
    """Print formatted section header."""
    print(f"\n{Colors.BOLD}{Colors.BLUE}{'=' * 60}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.BLUE}{text:^60}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.BLUE}{'=' * 60}{Colors.RESET}\n")


def print_success(text):
    """Print success message."""
    print(f"{Colors.GREEN}✓ {text}{Colors.RESET}")


def print_error(text):
    """Print error message."""
    print(f"{Colors.RED}✗ {text}{Colors.RESET}")


def print_warning(text):
    """Print warning message."""
    print(f"{Colors.YELLOW}⚠ {text}{Colors.RESET}")


def print_info(text):
    """Print info message."""
    print(f"{Colors.BLUE}ℹ {text}{Colors.RESET}")


def money(amount) -> str:
    return f"₱{amount:,.2f}" if amount is not None else "Not set"


def parse_date(value):
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r} (expected YYYY-MM-DD)")


def print_summary(summary, updated_label):
    print_header("SUMMARY")
    print(f"Total found: {summary['total']}")
    print_success(f"{updated_label}: {summary['updated']}")
    if summary["skipped"]:
        print_warning(f"Skipped: {summary['skipped']}")


# ============================================================================
# Commands
# ============================================================================


def cmd_seed(args, db):
    """Create tables and the default admin account."""
    from . import models  # noqa: F401
    from .maintenance.seed import seed_admin_user

    Base.metadata.create_all(bind=db.get_bind())
    user, created = seed_admin_user(db)
    if created:
        print_success(f"Admin user created: {user.username}")
        print_info(f"Password: {settings.default_admin_password} (change it on first login)")
    else:
        print_info(f"Admin user already exists: {user.username}")
    return True


def cmd_seed_settings(args, db):
    """Upsert the default settings categories."""
    from .maintenance.seed import seed_default_settings

    written = seed_default_settings(db, keep_existing=args.keep_existing)
    for category in written:
        print_success(f"Seeded {category} settings")
    print_success("Settings seeding complete!")
    return True


def cmd_migrate(args, db):
    """Add employees.work_schedule when missing."""
    from .maintenance.migrations import add_work_schedule_column

    if add_work_schedule_column(db.get_bind()):
        print_success("Successfully added work_schedule column")
    else:
        print_info("Nothing to migrate")
    return True


def cmd_check_rate(args, db):
    """Show an employee's salary fields and a suggested hourly rate."""
    from .payroll.employee_rates import apply_suggested_rate, check_employee_rate

    report = check_employee_rate(db, args.first_name, args.last_name)
    if report is None:
        print_error(f"Employee {args.last_name}, {args.first_name} not found")
        return False

    print_header("Employee Salary Information")
    print(f"Name: {report['name']}")
    print(f"ID: {report['employee_id']}")
    print(f"Basic Salary: {money(report['basic_salary'])}")
    print(f"Bi-Monthly Salary: {money(report['bi_monthly_salary'])}")
    print(f"Rate Per Hour: {money(report['rate_per_hour'])}")
    print(f"Rate Per Day: {money(report['rate_per_day'])}")

    suggested = report["suggested_rate_per_hour"]
    if suggested is not None:
        print_info(f"Calculated Hourly Rate: {money(suggested)} ({report['basis']})")
        if args.apply:
            apply_suggested_rate(db, report["employee_id"], suggested)
            print_success("Hourly rate saved")
        else:
            print_info("Run again with --apply to save it")
    return True


def cmd_check_deductions(args, db):
    """Show late minutes and cash advances deducted in a pay period."""
    from .payroll.deductions import period_deductions
    from .payroll.employee_rates import find_employee

    employee = find_employee(db, args.first_name, args.last_name)
    if employee is None:
        print_error(f"Employee {args.last_name}, {args.first_name} not found")
        return False

    report = period_deductions(db, employee, args.start, args.end)
    period = f"{report['period_start']} to {report['period_end']}"

    print_header("Employee Information")
    print(f"Name: {report['name']}")
    print(f"ID: {report['employee_id']}")
    print(f"Basic Salary: {money(report['basic_salary'])}/month")
    print(f"Hourly Rate: {money(report['hourly_rate'])}")

    print_header(f"Attendance ({period})")
    if not report["attendance"]:
        print_warning("No attendance records found")
    for index, day in enumerate(report["attendance"], 1):
        line = (
            f"{index}. {day['date']} - in {day['time_in'] or 'N/A'}, "
            f"out {day['time_out'] or 'N/A'}"
        )
        if day["late_minutes"]:
            print_warning(f"{line} LATE {day['late_minutes']} min")
        else:
            print_success(line)
    print(f"\nDays Present: {report['days_present']}")
    print(f"Expected Working Days: {report['expected_working_days']}")
    print(f"Days Absent: {report['days_absent']}")
    print(f"Total Hours Worked: {report['total_hours_worked']:.2f} hrs")
    print(f"Total Overtime Hours: {report['total_overtime_hours']:.2f} hrs")

    print_header(f"Cash Advances ({period})")
    if not report["cash_advances"]:
        print_info("No cash advance requests found")
    for advance in report["cash_advances"]:
        print(f"#{advance['id']} {money(advance['amount'])} ({advance['reason'] or '-'})")
        print(f"  Disbursed: {advance['disbursed_at'] or 'Not disbursed'}")
        if advance["in_period"]:
            print_success("Deducted in this period")
        elif advance["blockers"]:
            for blocker in advance["blockers"]:
                print_warning(blocker)
        else:
            print_warning("Approved & disbursed, but outside this period")

    print_header("Payslip Deductions")
    print(
        f"Total Late Minutes: {report['total_late_minutes']} min "
        f"(after {report['grace_minutes']} min grace)"
    )
    print(f"Late Deduction: {money(report['late_deduction'])}")
    print(f"Cash Advance: {money(report['total_cash_advance'])}")
    return True


def cmd_check_overtime(args, db):
    """List approved overtime requests with missing hours or pay."""
    from .payroll.overtime import OvertimeAuditor
    from .payroll.reports import export_overtime_audit_xlsx

    findings = OvertimeAuditor.find_incomplete(db)
    print_header("Overtime Requests with Missing Hours/Pay")
    print(f"Total Found: {len(findings)}")

    if not findings:
        print_success("All approved overtime requests have hours and pay calculated!")

    for finding in findings:
        print(f"\n{finding['employee']} ({finding['employee_id']})")
        print(f"  Date: {finding['date']}")
        print(f"  Start Time: {finding['start_time']}")
        print(f"  End Time: {finding['end_time'] or '✗ NULL'}")
        print(f"  Hours: {finding['total_hours'] or '✗ NULL'}")
        print(f"  Pay: {money(finding['overtime_pay'])}")
        fix = finding["proposed_fix"]
        if fix:
            print_info(
                f"Can be fixed: {fix['total_hours']:.2f} hrs, {money(fix['overtime_pay'])}"
            )
        else:
            print_warning(finding["issue"])

    if args.xlsx:
        path = export_overtime_audit_xlsx(findings, args.xlsx)
        print_success(f"Report written to {path}")
    return True


def cmd_complete_overtime(args, db):
    """Close open approved overtime from attendance clock-out."""
    from .payroll.overtime import OvertimeAuditor

    summary = OvertimeAuditor.complete_from_attendance(db, dry_run=args.dry_run)
    for item in summary["items"]:
        if item["action"] == "updated":
            print_success(
                f"{item['employee']} {item['date']}: {item['total_hours']:.2f} hrs, "
                f"{money(item['overtime_pay'])}"
            )
        else:
            print_warning(f"{item['employee']} {item['date']}: {item['reason']}")
    print_summary(summary, "Would fix" if args.dry_run else "Fixed")
    return True


def cmd_recalculate_overtime(args, db):
    """Recompute pay for overtime that has hours but no pay."""
    from .payroll.overtime import OvertimeAuditor

    summary = OvertimeAuditor.recalculate_pay(db, dry_run=args.dry_run)
    for item in summary["items"]:
        if item["action"] == "updated":
            print_success(
                f"{item['employee']} {item['date']}: {item['total_hours']} hrs "
                f"x {money(item['hourly_rate'])} = {money(item['overtime_pay'])}"
            )
        else:
            print_warning(f"{item['employee']} {item['date']}: {item['reason']}")
    print_summary(summary, "Would update" if args.dry_run else "Updated")
    return True


COMMANDS = {
    "seed": cmd_seed,
    "seed-settings": cmd_seed_settings,
    "migrate": cmd_migrate,
    "check-rate": cmd_check_rate,
    "check-deductions": cmd_check_deductions,
    "check-overtime": cmd_check_overtime,
    "complete-overtime": cmd_complete_overtime,
    "recalculate-overtime": cmd_recalculate_overtime,
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog="payroll-admin",
        description="Payroll admin maintenance tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("seed", help="Create tables and the default admin user")

    seed_settings = subparsers.add_parser("seed-settings", help="Seed default settings")
    seed_settings.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not reset categories that are already stored",
    )

    subparsers.add_parser("migrate", help="Add employees.work_schedule if missing")

    check_rate = subparsers.add_parser("check-rate", help="Show an employee's pay rates")
    check_rate.add_argument("first_name")
    check_rate.add_argument("last_name")
    check_rate.add_argument("--apply", action="store_true", help="Save the suggested rate")

    check_deductions = subparsers.add_parser(
        "check-deductions", help="Show late and cash advance deductions for a pay period"
    )
    check_deductions.add_argument("first_name")
    check_deductions.add_argument("last_name")
    check_deductions.add_argument(
        "--start", type=parse_date, required=True, help="First day of the period (YYYY-MM-DD)"
    )
    check_deductions.add_argument(
        "--end", type=parse_date, required=True, help="Last day of the period (YYYY-MM-DD)"
    )

    check_overtime = subparsers.add_parser(
        "check-overtime", help="List approved overtime missing hours or pay"
    )
    check_overtime.add_argument("--xlsx", metavar="PATH", help="Also write an Excel report")

    for name, help_text in (
        ("complete-overtime", "Close open overtime from attendance clock-out"),
        ("recalculate-overtime", "Recompute zero/null overtime pay"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--dry-run", action="store_true", help="Show changes without saving")

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    db = SessionLocal()
    try:
        success = COMMANDS[args.command](args, db)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print_error(f"Error: {e}")
        success = False
    finally:
        db.close()

    return 0 if success else 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
