from pydantic import BaseModel, ConfigDict, Field


class CreditTypeResponse(BaseModel):
    id: int
    label: str
    min_amount: float
    max_amount: float
    max_months: int
    default_annual_rate: float
    default_fees: float
    default_insurance_rate: float

    model_config = ConfigDict(from_attributes=True)


class LabelResponse(BaseModel):
    """Job or employment type."""
    id: int
    label: str

    model_config = ConfigDict(from_attributes=True)


class DisplaySettingsResponse(BaseModel):
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 currency code")

    model_config = ConfigDict(from_attributes=True)
