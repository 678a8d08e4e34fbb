"""
Catalog lookups and first-run seeding of reference data.
"""
from typing import List
from sqlalchemy.orm import Session
from app.catalog.models import CreditType, Job, EmploymentType, DisplaySettings
from app.core.config import settings
from app.core.store import RecordStore
from app.core.logger import logger

DEFAULT_CREDIT_TYPES = [
    {"label": "Personal loan", "min_amount": 5000, "max_amount": 300000, "max_months": 84,
     "default_annual_rate": 7.5, "default_fees": 500, "default_insurance_rate": 0.4},
    {"label": "Car loan", "min_amount": 20000, "max_amount": 600000, "max_months": 72,
     "default_annual_rate": 6.0, "default_fees": 1000, "default_insurance_rate": 0.35},
    {"label": "Mortgage", "min_amount": 100000, "max_amount": 5000000, "max_months": 300,
     "default_annual_rate": 4.5, "default_fees": 3000, "default_insurance_rate": 0.3},
    {"label": "Interest-free purchase", "min_amount": 1000, "max_amount": 50000, "max_months": 24,
     "default_annual_rate": 0.0, "default_fees": 0, "default_insurance_rate": 0.0},
]

DEFAULT_JOBS = ["Engineer", "Teacher", "Doctor", "Merchant", "Craftsman", "Student", "Other"]

DEFAULT_EMPLOYMENT_TYPES = ["Permanent contract", "Fixed-term contract", "Self-employed", "Civil servant", "Retired"]


def list_credit_types(db: Session) -> List[CreditType]:
    return RecordStore(db, CreditType).list(sort="id", descending=False)


def list_jobs(db: Session) -> List[Job]:
    return RecordStore(db, Job).list(sort="label", descending=False)


def list_employment_types(db: Session) -> List[EmploymentType]:
    return RecordStore(db, EmploymentType).list(sort="label", descending=False)


def get_display_settings(db: Session) -> DisplaySettings:
    """Returns the settings row, falling back to configured defaults when absent."""
    record = RecordStore(db, DisplaySettings).get(1)
    if record is None:
        return DisplaySettings(id=1, currency=settings.DEFAULT_CURRENCY)
    return record


def seed_catalog(db: Session) -> None:
    """Inserts default reference data into empty tables. Safe to run on every startup."""
    credit_types = RecordStore(db, CreditType)
    if credit_types.count() == 0:
        for data in DEFAULT_CREDIT_TYPES:
            credit_types.create(commit=False, **data)
        logger.info(f"Seeded {len(DEFAULT_CREDIT_TYPES)} credit types")

    jobs = RecordStore(db, Job)
    if jobs.count() == 0:
        for label in DEFAULT_JOBS:
            jobs.create(commit=False, label=label)

    employment_types = RecordStore(db, EmploymentType)
    if employment_types.count() == 0:
        for label in DEFAULT_EMPLOYMENT_TYPES:
            employment_types.create(commit=False, label=label)

    display = RecordStore(db, DisplaySettings)
    if display.get(1) is None:
        display.create(commit=False, id=1, currency=settings.DEFAULT_CURRENCY)

    db.commit()
