from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from uuid import uuid4
from app.core.database import Base, TimestampMixin


class Admin(TimestampMixin, Base):
    """Back-office user allowed to review applications."""

    __tablename__ = "admins"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
