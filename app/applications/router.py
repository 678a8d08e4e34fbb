"""
FastAPI Routers for credit applications.
`router` serves applicants; `admin_router` serves the back-office review workflow.
"""
from typing import List, Literal, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header, Query, Response
from sqlalchemy.orm import Session

from app.applications.schemas import (
    ApplicationCreateRequest,
    ApplicationDetail,
    ApplicationFilters,
    ApplicationResponse,
    NoteCreateRequest,
    StatusUpdateRequest,
)
from app.applications.service import (
    submit_application,
    get_application,
    list_applications,
    change_status,
    toggle_priority,
    add_note,
)
from app.auth.dependencies import get_current_admin
from app.auth.models import Admin
from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.core.logger import get_logger_with_correlation
from app.exports.csv_export import applications_to_csv

router = APIRouter(tags=["Applications"])
admin_router = APIRouter(tags=["Admin"])


@router.post("", response_model=ApplicationResponse, status_code=201)
def create_application(
    data: ApplicationCreateRequest,
    db: Session = Depends(get_db),
    x_correlation_id: Optional[str] = Header(default=None)
):
    """Submits a credit application for a persisted simulation and notifies administrators."""
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        application = submit_application(db, data, correlation_id)
    except NotFoundError as e:
        logger.info(f"Application rejected: {e.message}")
        raise HTTPException(status_code=404, detail=e.message)

    return application


@router.get("/{application_id}", response_model=ApplicationDetail)
def read_application(application_id: str, db: Session = Depends(get_db)):
    """Confirmation view of a submitted application."""
    try:
        return get_application(db, application_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Application not found")


def _filters(
    status: Optional[Literal["all", "pending", "reviewing", "accepted", "rejected"]] = Query(default="all"),
    search: Optional[str] = Query(default=None),
    order: Literal["asc", "desc"] = Query(default="desc"),
) -> ApplicationFilters:
    return ApplicationFilters(status=status, search=search, order=order)


@admin_router.get("", response_model=List[ApplicationDetail])
def admin_list_applications(
    filters: ApplicationFilters = Depends(_filters),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    return list_applications(db, filters)


@admin_router.get("/export.csv")
def admin_export_csv(
    filters: ApplicationFilters = Depends(_filters),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
) -> Response:
    """CSV of the applications matching the current dashboard filters."""
    content = applications_to_csv(list_applications(db, filters))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="credit-applications.csv"'},
    )


@admin_router.patch("/{application_id}/status", response_model=ApplicationResponse)
def admin_change_status(
    application_id: str,
    data: StatusUpdateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    try:
        return change_status(db, application_id, data.status, current_admin.email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@admin_router.post("/{application_id}/priority", response_model=ApplicationResponse)
def admin_toggle_priority(
    application_id: str,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    try:
        return toggle_priority(db, application_id, current_admin.email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@admin_router.post("/{application_id}/notes", response_model=ApplicationResponse)
def admin_add_note(
    application_id: str,
    data: NoteCreateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    try:
        return add_note(db, application_id, data.content, current_admin.email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
