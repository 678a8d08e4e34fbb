"""
Business logic for credit simulations.
Validates terms against the credit product, runs the engine and persists the result.
"""
from typing import Optional
from sqlalchemy.orm import Session
from app.catalog.models import CreditType, Job
from app.core.exceptions import ValidationError
from app.core.logger import logger, audit_log
from app.core.store import RecordStore
from app.simulation import engine
from app.simulation.models import Simulation
from app.simulation.schemas import SimulationTerms, SimulationRequest


def calculate(data: SimulationTerms) -> engine.SimulationResult:
    """Runs the engine for validated terms."""
    inputs = engine.SimulationInput(
        amount=data.amount,
        months=data.months,
        annual_rate=data.annual_rate,
        fees=data.fees,
        insurance_rate=data.insurance_rate,
    )
    result = engine.simulate(inputs)
    if result is None:
        raise ValidationError("Amount and duration must be positive")

    logger.info(
        f"Simulation calculated: amount={data.amount}, months={data.months}, "
        f"monthly_payment={result.monthly_payment}"
    )
    return result


def check_credit_type_bounds(credit_type: CreditType, data: SimulationTerms) -> None:
    """Rejects terms outside the product limits."""
    if data.amount < credit_type.min_amount:
        raise ValidationError(f"Minimum amount is {credit_type.min_amount}")
    if data.amount > credit_type.max_amount:
        raise ValidationError(f"Maximum amount is {credit_type.max_amount}")
    if credit_type.max_months and data.months > credit_type.max_months:
        raise ValidationError(f"Maximum duration is {credit_type.max_months} months")


def create_simulation(db: Session, data: SimulationRequest, correlation_id: Optional[str] = None) -> Simulation:
    """
    Persists a simulation for later reference by an application.
    The engine result is stored verbatim, schedule included.
    """
    credit_type = RecordStore(db, CreditType).get_or_raise(data.credit_type_id)
    if data.job_id is not None:
        RecordStore(db, Job).get_or_raise(data.job_id)

    check_credit_type_bounds(credit_type, data)
    result = calculate(data)

    simulation = RecordStore(db, Simulation).create(
        credit_type_id=credit_type.id,
        job_id=data.job_id,
        correlation_id=correlation_id,
        **result.to_dict()
    )

    audit_log(
        action="simulation_created",
        user="public",
        resource=f"simulation_id={simulation.id}",
        details={"correlation_id": correlation_id, "amount": data.amount, "months": data.months}
    )
    logger.info(f"Simulation persisted: id={simulation.id}")

    return simulation


def get_simulation(db: Session, simulation_id: int) -> Simulation:
    return RecordStore(db, Simulation).get_or_raise(simulation_id)
