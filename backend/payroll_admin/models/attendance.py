"""
Attendance model: one clock-in/clock-out record per employee per day.
"""

from sqlalchemy import Column, Integer, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..database import Base


class Attendance(Base):
    """Daily attendance record."""

    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time_in = Column(DateTime, nullable=True)
    time_out = Column(DateTime, nullable=True)
    hours_worked = Column(Float, nullable=True)
    overtime_hours = Column(Float, nullable=True)

    employee = relationship("Employee", back_populates="attendance")

    def __repr__(self):
        return f"<Attendance(employee_id={self.employee_id}, date={self.date})>"
