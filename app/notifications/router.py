from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_admin
from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.notifications.schemas import NotificationFeed, NotificationResponse
from app.notifications.service import list_notifications, count_unread, mark_as_seen, mark_all_as_seen

router = APIRouter(tags=["Notifications"], dependencies=[Depends(get_current_admin)])


@router.get("", response_model=NotificationFeed)
def get_feed(db: Session = Depends(get_db)):
    """Notifications newest first, with the unread badge count."""
    notifications = list_notifications(db)
    return NotificationFeed(
        unread_count=count_unread(db),
        notifications=[NotificationResponse.model_validate(item) for item in notifications]
    )


@router.patch("/{notification_id}/seen", response_model=NotificationResponse)
def mark_seen(notification_id: str, db: Session = Depends(get_db)):
    try:
        return mark_as_seen(db, notification_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/seen-all")
def mark_all_seen(db: Session = Depends(get_db)):
    updated = mark_all_as_seen(db)
    return {"updated": updated}
