"""
FastAPI Router for credit simulation endpoints.
Exposes the amortization engine for live previews and persisted simulations.
"""
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header, Query, Response
from sqlalchemy.orm import Session

from app.applications.service import get_application
from app.auth.dependencies import get_current_admin
from app.catalog.service import get_display_settings
from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import get_logger_with_correlation
from app.exports.dependencies import get_formatters
from app.exports.formatters import FormatterRegistry
from app.exports.pdf_export import simulation_to_pdf
from app.simulation.schemas import SimulationTerms, SimulationRequest, SimulationResult, SimulationResponse
from app.simulation.service import calculate, create_simulation, get_simulation

router = APIRouter(tags=["Simulations"])


@router.post("/preview", response_model=SimulationResult)
def preview_simulation(data: SimulationTerms) -> SimulationResult:
    """
    Computes the monthly payment, totals, approximate APR and the full
    amortization schedule without persisting anything.

    - **amount**: Principal amount
    - **months**: Duration (1-600)
    - **annual_rate**: Nominal annual rate in percent
    - **fees**: Fixed fees added to the total cost
    - **insurance_rate**: Annual insurance rate in percent of the principal
    """
    try:
        result = calculate(data)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    return SimulationResult(**result.to_dict())


@router.post("", response_model=SimulationResponse, status_code=201)
def simulate_credit(
    data: SimulationRequest,
    db: Session = Depends(get_db),
    x_correlation_id: Optional[str] = Header(default=None)
) -> SimulationResponse:
    """
    Validates the terms against the credit product bounds, computes the
    simulation and stores it so an application can be submitted from it.
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        logger.info(f"Starting simulation: {data.model_dump()}")
        simulation = create_simulation(db, data, correlation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        logger.info(f"Simulation rejected: {e.message}")
        raise HTTPException(status_code=422, detail=e.message)

    logger.info(f"Simulation completed successfully: id={simulation.id}")
    return SimulationResponse.model_validate(simulation)


@router.get("/{simulation_id}", response_model=SimulationResponse)
def read_simulation(simulation_id: int, db: Session = Depends(get_db)) -> SimulationResponse:
    """Retrieves a persisted simulation by ID."""
    try:
        simulation = get_simulation(db, simulation_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Simulation not found")
    return SimulationResponse.model_validate(simulation)


@router.get("/{simulation_id}/pdf", dependencies=[Depends(get_current_admin)])
def export_simulation_pdf(
    simulation_id: int,
    application_id: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    formatters: FormatterRegistry = Depends(get_formatters)
) -> Response:
    """PDF summary of the simulation, with the applicant section when application_id is given."""
    try:
        simulation = get_simulation(db, simulation_id)
        application = get_application(db, application_id) if application_id else None
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    if application is not None and application.simulation_id != simulation.id:
        raise HTTPException(status_code=404, detail="Application not found for this simulation")

    content = simulation_to_pdf(
        simulation,
        formatters,
        application=application,
        currency=get_display_settings(db).currency,
        row_limit=settings.PDF_AMORTIZATION_ROWS,
    )
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="simulation-{simulation_id}.pdf"'},
    )
