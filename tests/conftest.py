"""
Pytest configuration and fixtures for payroll-admin tests.

This module provides reusable test fixtures including database sessions,
an authenticated API client, and sample employee/overtime data.
"""
import pytest
import sys
import os
from datetime import date, datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

from payroll_admin.database import Base
# Import all models to ensure tables are created
from payroll_admin.models import (
    User, UserRole, SystemSetting, Employee, Attendance, OvertimeRequest, OvertimeStatus
)


@pytest.fixture(scope="function")
def db_engine():
    """
    Create an in-memory SQLite database engine for testing.

    Yields:
        Engine: SQLAlchemy engine connected to in-memory database
    """
    engine = create_engine(
        "sqlite:///file:test_db?mode=memory&cache=shared&uri=true",
        connect_args={"check_same_thread": False, "uri": True},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """
    Create a database session for testing.

    Yields:
        Session: SQLAlchemy session for database operations
    """
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_employee(db_session):
    """
    Employee with a basic salary but no stored hourly rate.

    Returns:
        Employee: 35,200/month, which derives to 200.00/hour
    """
    employee = Employee(first_name="pds", last_name="lab", basic_salary=35200.0)
    db_session.add(employee)
    db_session.commit()
    db_session.refresh(employee)
    return employee


@pytest.fixture
def rated_employee(db_session):
    """
    Employee with a stored hourly rate.

    Returns:
        Employee: rate_per_hour 150.00
    """
    employee = Employee(
        first_name="test", last_name="lab", basic_salary=26400.0, rate_per_hour=150.0
    )
    db_session.add(employee)
    db_session.commit()
    db_session.refresh(employee)
    return employee


@pytest.fixture
def open_overtime(db_session, rated_employee):
    """
    Approved overtime with no end time, plus the attendance clock-out that closes it.

    Overtime starts 17:00 and the employee clocked out at 19:30 (2.5 hours).

    Returns:
        OvertimeRequest: open overtime request
    """
    work_date = date(2025, 12, 5)
    db_session.add(
        Attendance(
            employee_id=rated_employee.id,
            date=work_date,
            time_in=datetime(2025, 12, 5, 8, 0),
            time_out=datetime(2025, 12, 5, 19, 30),
            hours_worked=8.0,
        )
    )
    overtime = OvertimeRequest(
        employee_id=rated_employee.id,
        date=work_date,
        start_time=datetime(2025, 12, 5, 17, 0),
        status=OvertimeStatus.APPROVED,
        reason="Month-end closing",
    )
    db_session.add(overtime)
    db_session.commit()
    db_session.refresh(overtime)
    return overtime


@pytest.fixture
def api_client(session_factory):
    """
    Create a test client for API endpoint testing.

    Returns:
        TestClient: FastAPI test client
    """
    from fastapi.testclient import TestClient
    from payroll_admin.main import app
    from payroll_admin.database import get_db
    from payroll_admin.auth import get_password_hash

    # Create default admin user for tests
    db = session_factory()
    try:
        admin_user = User(
            username="admin",
            email="admin@example.com",
            full_name="System Admin",
            hashed_password=get_password_hash("Admin123!"),
            role=UserRole.ADMIN,
            must_change_password=False,
            is_active=True
        )
        db.add(admin_user)
        db.commit()
    finally:
        db.close()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app)
    try:
        yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(api_client):
    """
    Bearer headers for the seeded admin user.

    Returns:
        dict: Authorization header
    """
    response = api_client.post(
        "/api/auth/login", json={"username": "admin", "password": "Admin123!"}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
