"""
Admin notification feed.
"""
import enum
from typing import Optional
from uuid import uuid4
from sqlalchemy import String, Boolean, Enum
from sqlalchemy.orm import Mapped, mapped_column
from app.core.database import Base, TimestampMixin, get_enum_values


class NotificationType(str, enum.Enum):
    NEW_APPLICATION = "NEW_APPLICATION"


class Notification(TimestampMixin, Base):
    __tablename__ = "notifications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    type: Mapped[NotificationType] = mapped_column(
        Enum(NotificationType, values_callable=get_enum_values),
        nullable=False
    )
    application_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    seen: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
