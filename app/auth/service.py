"""
Administrator credential checks and bootstrap.
"""
from typing import Optional
from sqlalchemy.orm import Session
from app.auth.models import Admin
from app.core.config import settings
from app.core.logger import logger
from app.core.security import get_password_hash, verify_password
from app.core.utils import mask_email


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.email == email.lower()).first()


def authenticate_admin(db: Session, email: str, password: str) -> Optional[Admin]:
    """Returns the admin when the credentials match, None otherwise."""
    admin = get_admin_by_email(db, email)
    if not admin or not verify_password(password, admin.hashed_password):
        logger.warning(f"Failed admin login: {mask_email(email)}")
        return None
    return admin


def create_admin(db: Session, email: str, password: str) -> Admin:
    admin = Admin(email=email.lower(), hashed_password=get_password_hash(password))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Admin created: {mask_email(admin.email)}")
    return admin


def seed_admin(db: Session) -> None:
    """Creates the configured bootstrap admin if no admin exists yet."""
    if db.query(Admin).first() is None:
        create_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
