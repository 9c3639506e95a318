"""
Employee model holding the salary fields used by the pay-rate rules.
"""

from sqlalchemy import Column, Integer, String, Float, Text
from sqlalchemy.orm import relationship

from ..database import Base


class Employee(Base):
    """SQLAlchemy model for an employee's pay profile.

    Attributes:
        id: Primary key identifier
        first_name: Given name
        last_name: Family name
        basic_salary: Monthly basic salary
        bi_monthly_salary: Salary per semi-monthly pay period (optional)
        rate_per_hour: Stored hourly rate (optional, derived when missing)
        rate_per_day: Stored daily rate (optional)
        work_schedule: Free-form schedule description (added by migration)
        attendance: Attendance records for this employee
        overtime_requests: Overtime requests filed by this employee
        cash_advances: Cash advance requests filed by this employee
    """

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    basic_salary = Column(Float, nullable=False, default=0.0)
    bi_monthly_salary = Column(Float, nullable=True)
    rate_per_hour = Column(Float, nullable=True)
    rate_per_day = Column(Float, nullable=True)
    work_schedule = Column(Text, nullable=True)

    attendance = relationship(
        "Attendance", back_populates="employee", cascade="all, delete-orphan"
    )
    overtime_requests = relationship(
        "OvertimeRequest", back_populates="employee", cascade="all, delete-orphan"
    )
    cash_advances = relationship(
        "CashAdvanceRequest", back_populates="employee", cascade="all, delete-orphan"
    )

    @property
    def display_name(self) -> str:
        return f"{self.last_name}, {self.first_name}"

    def __repr__(self):
        return f"<Employee(id={self.id}, name='{self.display_name}')>"
