"""
Notification fan-out to administrators.
"""
from typing import List
from sqlalchemy.orm import Session
from app.core.store import RecordStore
from app.core.logger import logger
from app.notifications.models import Notification, NotificationType


def notify_new_application(db: Session, application_id: str, full_name: str, commit: bool = True) -> Notification:
    """Records a NEW_APPLICATION notification. With commit=False it joins the caller's transaction."""
    notification = RecordStore(db, Notification).create(
        commit=commit,
        type=NotificationType.NEW_APPLICATION,
        application_id=application_id,
        title=f"New application from {full_name}",
        seen=False,
    )
    logger.info(f"Notification queued: application_id={application_id}")
    return notification


def list_notifications(db: Session) -> List[Notification]:
    """Newest first."""
    return RecordStore(db, Notification).list(sort="created_at", descending=True)


def count_unread(db: Session) -> int:
    return RecordStore(db, Notification).count({"seen": False})


def mark_as_seen(db: Session, notification_id: str) -> Notification:
    store = RecordStore(db, Notification)
    notification = store.get_or_raise(notification_id)
    if notification.seen:
        return notification
    return store.update(notification, seen=True)


def mark_all_as_seen(db: Session) -> int:
    """Returns the number of notifications flipped to seen."""
    unseen = RecordStore(db, Notification).list({"seen": False}, sort=None)
    for notification in unseen:
        notification.seen = True
    db.commit()
    return len(unseen)
