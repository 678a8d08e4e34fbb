from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from app.notifications.models import NotificationType


class NotificationResponse(BaseModel):
    id: str
    type: NotificationType
    application_id: Optional[str]
    title: str
    seen: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationFeed(BaseModel):
    unread_count: int
    notifications: List[NotificationResponse]
