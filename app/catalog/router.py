"""
FastAPI Router for reference data used to prefill and validate simulations.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.catalog.schemas import CreditTypeResponse, LabelResponse, DisplaySettingsResponse
from app.catalog.service import list_credit_types, list_jobs, list_employment_types, get_display_settings
from app.core.database import get_db

router = APIRouter(tags=["Catalog"])


@router.get("/credit-types", response_model=List[CreditTypeResponse])
def get_credit_types(db: Session = Depends(get_db)):
    """Credit products with their amount and duration bounds."""
    return list_credit_types(db)


@router.get("/jobs", response_model=List[LabelResponse])
def get_jobs(db: Session = Depends(get_db)):
    return list_jobs(db)


@router.get("/employment-types", response_model=List[LabelResponse])
def get_employment_types(db: Session = Depends(get_db)):
    return list_employment_types(db)


@router.get("/settings", response_model=DisplaySettingsResponse)
def get_settings(db: Session = Depends(get_db)):
    return get_display_settings(db)
