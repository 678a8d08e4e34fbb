"""
Reference data consumed by the simulator and the application form.
"""
from sqlalchemy import Integer, Float, String
from sqlalchemy.orm import Mapped, mapped_column
from app.core.database import Base, TimestampMixin


class CreditType(TimestampMixin, Base):
    """A credit product with its amount/term bounds and default pricing."""

    __tablename__ = "credit_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    min_amount: Mapped[float] = mapped_column(Float, nullable=False)
    max_amount: Mapped[float] = mapped_column(Float, nullable=False)
    max_months: Mapped[int] = mapped_column(Integer, nullable=False)
    default_annual_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    default_fees: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    default_insurance_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    def __repr__(self):
        return f"<CreditType(id={self.id}, label={self.label})>"


class Job(TimestampMixin, Base):
    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    label: Mapped[str] = mapped_column(String(100), nullable=False)


class EmploymentType(TimestampMixin, Base):
    __tablename__ = "employment_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    label: Mapped[str] = mapped_column(String(100), nullable=False)


class DisplaySettings(TimestampMixin, Base):
    """Single-row table holding presentation settings."""

    __tablename__ = "display_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="MAD")
