"""
Pydantic schemas for input/output validation.
Enforces strict type checking and boundary constraints.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime

MAX_AMOUNT = 1_000_000_000


class AmortizationRow(BaseModel):
    """Represents a single row in the amortization schedule."""
    month: int = Field(..., ge=1, description="Month number")
    payment: float = Field(..., description="Total installment, insurance included")
    interest: float = Field(..., ge=0, description="Interest amount")
    principal: float = Field(..., ge=0, description="Principal repaid this month")
    insurance: float = Field(..., ge=0, description="Insurance share")
    remaining_balance: float = Field(..., ge=0, description="Remaining balance")

    model_config = ConfigDict(from_attributes=True)


class SimulationTerms(BaseModel):
    """Loan terms entered by the applicant."""
    amount: float = Field(..., gt=0, le=MAX_AMOUNT, description="Principal amount")
    months: int = Field(..., ge=1, le=600, description="Duration in months")
    annual_rate: float = Field(..., ge=0, le=100, description="Nominal annual rate in percent (e.g. 5 = 5%)")
    fees: float = Field(0.0, ge=0, description="Fixed fees")
    insurance_rate: float = Field(0.0, ge=0, le=100, description="Annual insurance rate in percent of the principal")


class SimulationRequest(SimulationTerms):
    """Simulation to persist, tied to a credit product."""
    credit_type_id: int = Field(..., description="Credit product")
    job_id: Optional[int] = Field(None, description="Applicant job")


class SimulationResult(BaseModel):
    """Simulation figures. APR is a flat annualization, not an IRR."""
    amount: float
    months: int
    annual_rate: float
    fees: float
    insurance_rate: float
    monthly_payment: float = Field(..., description="Monthly installment, insurance included")
    base_monthly_payment: float = Field(..., description="Monthly installment without insurance")
    insurance_monthly: float
    total_cost: float
    total_interest: float
    total_insurance: float
    apr: float = Field(..., description="Approximate annual percentage rate")
    amortization: List[AmortizationRow]

    model_config = ConfigDict(from_attributes=True)


class SimulationResponse(SimulationResult):
    """Persisted simulation payload."""
    id: int = Field(..., description="Persisted simulation ID")
    credit_type_id: int
    job_id: Optional[int] = None
    created_at: datetime = Field(..., description="Simulation timestamp")
