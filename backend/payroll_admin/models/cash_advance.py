"""
Cash advance request model.
"""

from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Enum as SQLEnum
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum

from ..database import Base


class CashAdvanceStatus(str, enum.Enum):
    """Overall state of a cash advance request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class ApprovalStatus(str, enum.Enum):
    """Decision of a single approver."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CashAdvanceRequest(Base):
    """SQLAlchemy model for a cash advance filed by an employee.

    An advance is deducted in the pay period it was disbursed in, and only
    once both the manager and the admin approved it.

    Attributes:
        id: Primary key identifier
        employee_id: Employee who filed the request
        amount: Requested amount
        reason: Free-text justification
        repayment_plan: How the employee intends to repay (optional)
        remaining_balance: Amount still owed
        status: Overall request status
        manager_approval: Manager decision
        admin_approval: Admin decision
        is_disbursed: Whether the cash was handed out
        disbursed_at: When the cash was handed out
        created_at: When the request was filed
    """

    __tablename__ = "cash_advance_requests"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    reason = Column(String, nullable=True)
    repayment_plan = Column(String, nullable=True)
    remaining_balance = Column(Float, nullable=True)
    status = Column(SQLEnum(CashAdvanceStatus), nullable=False, default=CashAdvanceStatus.PENDING)
    manager_approval = Column(
        SQLEnum(ApprovalStatus, name="manager_approval"),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    admin_approval = Column(
        SQLEnum(ApprovalStatus, name="admin_approval"),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    is_disbursed = Column(Boolean, nullable=False, default=False)
    disbursed_at = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="cash_advances")

    def __repr__(self):
        return (
            f"<CashAdvanceRequest(id={self.id}, employee_id={self.employee_id}, "
            f"amount={self.amount}, status={self.status})>"
        )
