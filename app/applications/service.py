"""
Business logic for credit applications.
Covers public submission and the admin review workflow (status, priority, notes).
"""
from typing import List, Optional
from uuid import uuid4
from sqlalchemy.orm import Session
from app.applications.models import CreditApplication, ApplicationStatus
from app.applications.schemas import ApplicationCreateRequest, ApplicationFilters
from app.catalog.models import EmploymentType, Job
from app.core.database import utcnow
from app.core.logger import logger, audit_log
from app.core.store import RecordStore
from app.core.utils import mask_email
from app.notifications.service import notify_new_application
from app.simulation.models import Simulation


def submit_application(
    db: Session,
    data: ApplicationCreateRequest,
    correlation_id: Optional[str] = None
) -> CreditApplication:
    """
    Creates a pending application for an existing simulation and notifies admins.
    Application and notification are committed together.
    """
    simulation = RecordStore(db, Simulation).get_or_raise(data.simulation_id)
    RecordStore(db, EmploymentType).get_or_raise(data.employment_type_id)
    RecordStore(db, Job).get_or_raise(data.job_id)

    now = utcnow()
    application = RecordStore(db, CreditApplication).create(
        commit=False,
        simulation_id=simulation.id,
        credit_type_id=simulation.credit_type_id,
        employment_type_id=data.employment_type_id,
        job_id=data.job_id,
        full_name=data.full_name,
        email=data.email,
        phone=data.phone,
        monthly_income=data.monthly_income,
        comment=data.comment,
        status=ApplicationStatus.PENDING,
        priority=False,
        notes=[],
        status_history=[{"status": ApplicationStatus.PENDING.value, "changed_at": now.isoformat()}],
        created_at=now,
        updated_at=now,
    )
    notify_new_application(db, application.id, application.full_name, commit=False)

    db.commit()
    db.refresh(application)

    audit_log(
        action="application_submitted",
        user=mask_email(data.email),
        resource=f"application_id={application.id}",
        details={"correlation_id": correlation_id, "simulation_id": simulation.id}
    )
    logger.info(f"Application submitted: id={application.id}, simulation_id={simulation.id}")

    return application


def get_application(db: Session, application_id: str) -> CreditApplication:
    return RecordStore(db, CreditApplication).get_or_raise(application_id)


def list_applications(db: Session, filters: ApplicationFilters) -> List[CreditApplication]:
    """
    Lists applications for the admin dashboard.
    Status "all" disables the status filter; search matches name or email, case-insensitively.
    """
    status = None if filters.status in (None, "all") else ApplicationStatus(filters.status)
    applications = RecordStore(db, CreditApplication).list(
        {"status": status},
        sort="created_at",
        descending=filters.order == "desc",
    )

    if filters.search:
        query = filters.search.strip().lower()
        applications = [
            item for item in applications
            if query in (item.full_name or "").lower() or query in (item.email or "").lower()
        ]

    return applications


def change_status(db: Session, application_id: str, status: ApplicationStatus, author: str) -> CreditApplication:
    """Moves an application to `status`, appending to its history. Same status is a no-op."""
    store = RecordStore(db, CreditApplication)
    application = store.get_or_raise(application_id)
    if application.status == status:
        return application

    previous = application.status
    changed_at = utcnow()
    history = list(application.status_history or [])
    history.append({"status": status.value, "changed_at": changed_at.isoformat(), "author": author})
    application = store.update(application, status=status, status_history=history)

    audit_log(
        action="application_status_changed",
        user=author,
        resource=f"application_id={application.id}",
        details={"from": previous.value, "to": status.value}
    )
    return application


def toggle_priority(db: Session, application_id: str, author: str) -> CreditApplication:
    store = RecordStore(db, CreditApplication)
    application = store.get_or_raise(application_id)
    application = store.update(application, priority=not application.priority)

    audit_log(
        action="application_priority_toggled",
        user=author,
        resource=f"application_id={application.id}",
        details={"priority": application.priority}
    )
    return application


def add_note(db: Session, application_id: str, content: str, author: str) -> CreditApplication:
    store = RecordStore(db, CreditApplication)
    application = store.get_or_raise(application_id)

    note = {
        "id": str(uuid4()),
        "content": content,
        "author": author,
        "created_at": utcnow().isoformat(),
    }
    notes = list(application.notes or [])
    notes.append(note)
    application = store.update(application, notes=notes)

    logger.info(f"Note added to application {application.id} by {author}")
    return application
