"""
Unit tests for the pay-period deduction report.

Tests late minutes against the attendance policy, the late deduction and
which cash advances count for a period.
"""
import pytest
from datetime import date, datetime

from payroll_admin.models import (
    Attendance, ApprovalStatus, CashAdvanceRequest, CashAdvanceStatus, Employee
)
from payroll_admin.payroll.deductions import (
    cash_advance_blockers,
    count_working_days,
    late_deduction,
    late_minutes,
    load_attendance_policy,
    period_deductions,
)
from payroll_admin.services import SettingsStore

PERIOD = (date(2025, 12, 1), date(2025, 12, 15))


def _attendance(db_session, employee, day, hour, minute):
    db_session.add(
        Attendance(
            employee_id=employee.id,
            date=date(2025, 12, day),
            time_in=datetime(2025, 12, day, hour, minute),
            time_out=datetime(2025, 12, day, 17, 0),
            hours_worked=8.0,
            overtime_hours=0.0,
        )
    )


@pytest.fixture
def late_week(db_session, rated_employee):
    """Three clock-ins in the period (10, 30 and 60 min after 08:00) and one after it."""
    _attendance(db_session, rated_employee, 1, 8, 10)
    _attendance(db_session, rated_employee, 2, 8, 30)
    _attendance(db_session, rated_employee, 3, 9, 0)
    _attendance(db_session, rated_employee, 16, 10, 0)
    db_session.commit()
    return rated_employee


@pytest.fixture
def cash_advances(db_session, rated_employee):
    """Cash advances in every state that matters for a period."""
    approved = dict(
        status=CashAdvanceStatus.APPROVED,
        manager_approval=ApprovalStatus.APPROVED,
        admin_approval=ApprovalStatus.APPROVED,
        is_disbursed=True,
    )
    advances = {
        "mid_period": CashAdvanceRequest(
            employee_id=rated_employee.id, amount=2000.0, reason="Tuition",
            disbursed_at=datetime(2025, 12, 10, 14, 0), **approved
        ),
        "last_day": CashAdvanceRequest(
            employee_id=rated_employee.id, amount=500.0, reason="Fare",
            disbursed_at=datetime(2025, 12, 15, 16, 30), **approved
        ),
        "before_period": CashAdvanceRequest(
            employee_id=rated_employee.id, amount=1000.0, reason="Rent",
            disbursed_at=datetime(2025, 11, 28, 9, 0), **approved
        ),
        "awaiting_admin": CashAdvanceRequest(
            employee_id=rated_employee.id, amount=3000.0, reason="Medical",
            manager_approval=ApprovalStatus.APPROVED,
        ),
    }
    db_session.add_all(advances.values())
    db_session.commit()
    return advances


class TestLateMinutes:
    """Tests for the late-arrival rule."""

    @pytest.mark.parametrize(
        "clock_in,expected",
        [
            (datetime(2025, 12, 1, 7, 55), 0),
            (datetime(2025, 12, 1, 8, 15), 0),
            (datetime(2025, 12, 1, 8, 16), 16),
            (datetime(2025, 12, 1, 9, 30), 90),
            (None, 0),
        ],
    )
    def test_grace_period(self, clock_in, expected):
        """Test that only clock-ins past the grace period count, from the start time."""
        assert late_minutes(clock_in, 8 * 60, 15) == expected

    def test_late_deduction(self):
        """Test the per-minute share of the hourly rate."""
        assert late_deduction(90, 150.0) == 225.0
        assert late_deduction(0, 150.0) == 0.0
        assert late_deduction(30, None) == 0.0

    def test_count_working_days(self):
        """Test weekday counting for the first half of December 2025."""
        assert count_working_days(*PERIOD) == 11
        assert count_working_days(*PERIOD, weekend_days={6}) == 13


class TestAttendancePolicy:
    """Tests for reading the policy from the attendance settings."""

    def test_defaults_without_settings(self, db_session):
        """Test the fallback when the category was never stored."""
        policy = load_attendance_policy(db_session)

        assert policy == {"work_start": 480, "grace_minutes": 15, "weekend_days": {5, 6}}

    def test_reads_stored_category(self, db_session):
        """Test that stored values override the defaults key by key."""
        SettingsStore(db_session).upsert(
            "attendance", {"workStart": "09:30", "weekendDays": ["Sunday"]}
        )

        policy = load_attendance_policy(db_session)

        assert policy["work_start"] == 570
        assert policy["grace_minutes"] == 15
        assert policy["weekend_days"] == {6}


class TestPeriodDeductions:
    """Tests for the per-employee period report."""

    def test_late_totals(self, db_session, late_week):
        """Test attendance and late figures for the period."""
        report = period_deductions(db_session, late_week, *PERIOD)

        assert [d["date"] for d in report["attendance"]] == [
            "2025-12-01", "2025-12-02", "2025-12-03"
        ]
        assert [d["late_minutes"] for d in report["attendance"]] == [0, 30, 60]
        assert report["total_late_minutes"] == 90
        # 150/h over 60 min x 90 min
        assert report["late_deduction"] == 225.0
        assert report["days_present"] == 3
        assert report["expected_working_days"] == 11
        assert report["days_absent"] == 8
        assert report["total_hours_worked"] == 24.0

    def test_grace_from_settings(self, db_session, late_week):
        """Test that a zero grace period from settings counts every late minute."""
        SettingsStore(db_session).upsert("attendance", {"gracePeriodMinutes": 0})

        report = period_deductions(db_session, late_week, *PERIOD)

        assert report["total_late_minutes"] == 100
        assert report["grace_minutes"] == 0

    def test_derived_rate(self, db_session, sample_employee):
        """Test the deduction when only the monthly salary is stored."""
        _attendance(db_session, sample_employee, 4, 8, 30)
        db_session.commit()

        report = period_deductions(db_session, sample_employee, *PERIOD)

        assert report["hourly_rate"] == 200.0
        assert report["late_deduction"] == 100.0

    def test_no_rate_no_deduction(self, db_session):
        """Test that an employee without rate or salary has nothing deducted."""
        employee = Employee(first_name="no", last_name="rate", basic_salary=0.0)
        db_session.add(employee)
        db_session.commit()
        _attendance(db_session, employee, 2, 9, 0)
        db_session.commit()

        report = period_deductions(db_session, employee, *PERIOD)

        assert report["total_late_minutes"] == 60
        assert report["hourly_rate"] is None
        assert report["late_deduction"] == 0.0

    def test_cash_advances(self, db_session, rated_employee, cash_advances):
        """Test which cash advances are deducted in the period."""
        report = period_deductions(db_session, rated_employee, *PERIOD)

        by_id = {a["id"]: a for a in report["cash_advances"]}
        assert len(by_id) == 4
        assert by_id[cash_advances["mid_period"].id]["in_period"] is True
        assert by_id[cash_advances["last_day"].id]["in_period"] is True
        assert by_id[cash_advances["before_period"].id]["in_period"] is False
        assert by_id[cash_advances["before_period"].id]["blockers"] == []
        assert by_id[cash_advances["awaiting_admin"].id]["blockers"] == [
            "Admin approval needed",
            "Not yet disbursed",
        ]
        assert report["total_cash_advance"] == 2500.0

    def test_empty_period(self, db_session, rated_employee):
        """Test a period with no attendance and no advances."""
        report = period_deductions(db_session, rated_employee, date(2026, 1, 3), date(2026, 1, 4))

        assert report["attendance"] == []
        assert report["expected_working_days"] == 0
        assert report["days_absent"] == 0
        assert report["late_deduction"] == 0.0
        assert report["total_cash_advance"] == 0.0

    def test_reversed_period(self, db_session, rated_employee):
        """Test that a start after the end is rejected."""
        with pytest.raises(ValueError):
            period_deductions(db_session, rated_employee, date(2025, 12, 15), date(2025, 12, 1))


def test_blockers_for_new_request():
    """Test that a freshly filed request lists every missing step."""
    advance = CashAdvanceRequest(
        amount=100.0,
        manager_approval=ApprovalStatus.PENDING,
        admin_approval=ApprovalStatus.PENDING,
        is_disbursed=False,
    )

    assert cash_advance_blockers(advance) == [
        "Manager approval needed",
        "Admin approval needed",
        "Not yet disbursed",
    ]
