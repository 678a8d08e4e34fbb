"""
Data models for credit applications submitted from a simulation.
"""
import enum
from typing import Any, Dict, List, Optional
from uuid import uuid4
from sqlalchemy import String, Float, Boolean, Text, Enum, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.database import Base, TimestampMixin, get_enum_values
from app.catalog.models import CreditType, EmploymentType, Job
from app.simulation.models import Simulation


class ApplicationStatus(str, enum.Enum):
    """Review workflow states."""
    PENDING = "pending"
    REVIEWING = "reviewing"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class CreditApplication(TimestampMixin, Base):
    __tablename__ = "credit_applications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    simulation_id: Mapped[int] = mapped_column(ForeignKey("simulations.id"), nullable=False, index=True)
    credit_type_id: Mapped[int] = mapped_column(ForeignKey("credit_types.id"), nullable=False)
    employment_type_id: Mapped[int] = mapped_column(ForeignKey("employment_types.id"), nullable=False)
    job_id: Mapped[int] = mapped_column(ForeignKey("jobs.id"), nullable=False)

    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    monthly_income: Mapped[float] = mapped_column(Float, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, values_callable=get_enum_values),
        nullable=False,
        default=ApplicationStatus.PENDING,
        index=True
    )
    priority: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Lists are replaced wholesale on every change; concurrent edits are last-write-wins
    notes: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    status_history: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    simulation: Mapped[Simulation] = relationship(Simulation)
    credit_type: Mapped[CreditType] = relationship(CreditType)
    employment_type: Mapped[EmploymentType] = relationship(EmploymentType)
    job: Mapped[Job] = relationship(Job)

    def __repr__(self):
        return f"<CreditApplication(id={self.id}, status={self.status})>"
