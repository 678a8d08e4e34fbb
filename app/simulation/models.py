"""
Data models for credit simulations.
Stores the computed result verbatim so an application can reference it later.
"""
from typing import Any, List, Optional
from sqlalchemy import Integer, Float, String, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.database import Base, TimestampMixin
from app.catalog.models import CreditType


class Simulation(TimestampMixin, Base):
    """Entity representing a performed credit simulation."""

    __tablename__ = "simulations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    credit_type_id: Mapped[int] = mapped_column(ForeignKey("credit_types.id"), nullable=False)
    job_id: Mapped[Optional[int]] = mapped_column(ForeignKey("jobs.id"), nullable=True)

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    months: Mapped[int] = mapped_column(Integer, nullable=False)
    annual_rate: Mapped[float] = mapped_column(Float, nullable=False)
    fees: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    insurance_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    monthly_payment: Mapped[float] = mapped_column(Float, nullable=False)
    base_monthly_payment: Mapped[float] = mapped_column(Float, nullable=False)
    insurance_monthly: Mapped[float] = mapped_column(Float, nullable=False)
    total_cost: Mapped[float] = mapped_column(Float, nullable=False)
    total_interest: Mapped[float] = mapped_column(Float, nullable=False)
    total_insurance: Mapped[float] = mapped_column(Float, nullable=False)
    apr: Mapped[float] = mapped_column(Float, nullable=False)
    amortization: Mapped[List[Any]] = mapped_column(JSON, nullable=False)

    correlation_id: Mapped[Optional[str]] = mapped_column(String(100), index=True, nullable=True)

    credit_type: Mapped[CreditType] = relationship(CreditType)

    def __repr__(self):
        return f"<Simulation(id={self.id}, amount={self.amount}, months={self.months})>"
