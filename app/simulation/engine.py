"""
Amortization engine.
Implements the annuity (Price Table) payment, the month-by-month schedule and
the aggregated loan cost figures.

Pure functions: floats in, frozen dataclasses out. No I/O, no shared state.
Rounding is deferred to the schedule rows and to the result boundary so it
never compounds across periods.
"""
import math
from dataclasses import asdict, dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from app.core.utils import to_number

TWO_PLACES = Decimal("0.01")
# Above this magnitude a float no longer resolves cents
MAX_CENT_PRECISION = 1e15


def round_currency(value: float) -> float:
    """
    Half-up rounding to cents (1.005 -> 1.01, 2.675 -> 2.68).
    Non-finite and very large values are returned unchanged.
    """
    if not math.isfinite(value) or abs(value) >= MAX_CENT_PRECISION:
        return float(value)
    return float(Decimal(str(value)).quantize(TWO_PLACES, ROUND_HALF_UP))


def monthly_rate_from_annual(annual_rate_percent: float) -> float:
    return annual_rate_percent / 12 / 100


@dataclass(frozen=True)
class PeriodRow:
    month: int
    payment: float
    interest: float
    principal: float
    insurance: float
    remaining_balance: float


@dataclass(frozen=True)
class SimulationInput:
    amount: float
    months: int
    annual_rate: float = 0.0
    fees: float = 0.0
    insurance_rate: float = 0.0

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> "SimulationInput":
        """
        Builds an input from raw form values.

        Missing or non-numeric fields are substituted with 0 here, explicitly;
        the degenerate-input guard in `simulate` then suppresses any result
        for a zero amount or term. Months are truncated to whole periods.
        """
        months = to_number(values.get("months"))
        return cls(
            amount=to_number(values.get("amount")),
            months=max(0, math.floor(months)),
            annual_rate=to_number(values.get("annual_rate")),
            fees=to_number(values.get("fees")),
            insurance_rate=to_number(values.get("insurance_rate")),
        )


@dataclass(frozen=True)
class SimulationResult:
    amount: float
    months: int
    annual_rate: float
    fees: float
    insurance_rate: float
    monthly_payment: float
    base_monthly_payment: float
    insurance_monthly: float
    total_cost: float
    total_interest: float
    total_insurance: float
    # Flat annualization of the credit cost, not an IRR-solved rate
    apr: float
    amortization: Tuple[PeriodRow, ...]

    def to_dict(self) -> dict:
        data = asdict(self)
        data["amortization"] = [asdict(row) for row in self.amortization]
        return data


def monthly_payment(principal: float, term_months: int, annual_rate_percent: float) -> float:
    """
    Fixed installment excluding insurance. Not rounded.

    Formula: PMT = PV * [i * (1+i)^n] / [(1+i)^n - 1]
    """
    if not term_months or term_months <= 0:
        return 0.0

    rate = monthly_rate_from_annual(annual_rate_percent)
    if rate == 0:
        return principal / term_months

    # log1p/expm1 keep (1+i)^n - 1 accurate for very small rates
    growth = term_months * math.log1p(rate)
    factor = math.exp(growth)
    return principal * (rate * factor) / math.expm1(growth)


def amortization_schedule(
    amount: float,
    months: int,
    annual_rate: float,
    monthly_payment: float,
    insurance_monthly: float = 0.0,
) -> List[PeriodRow]:
    """
    Month-by-month breakdown of `monthly_payment` (insurance included) into
    interest, principal and insurance. Empty for a non-positive amount or term.

    The last period repays whatever balance is left, so the schedule always
    ends at exactly 0.00.
    """
    months = max(0, math.floor(months))
    if amount <= 0 or months == 0:
        return []

    rate = monthly_rate_from_annual(annual_rate)
    payment_ex_insurance = monthly_payment - insurance_monthly
    balance = float(amount)
    rows: List[PeriodRow] = []

    for month in range(1, months + 1):
        interest = balance * rate if rate else 0.0
        principal = max(0.0, payment_ex_insurance - interest)

        if month == months:
            principal = balance

        balance = max(0.0, balance - principal)

        rows.append(PeriodRow(
            month=month,
            payment=round_currency(monthly_payment),
            interest=round_currency(interest),
            principal=round_currency(principal),
            insurance=round_currency(insurance_monthly),
            remaining_balance=round_currency(balance),
        ))

    return rows


def simulate(inputs: SimulationInput) -> Optional[SimulationResult]:
    """
    Computes payments, totals, approximate APR and the full schedule.
    Returns None when amount or months is not positive.
    """
    amount = inputs.amount
    months = inputs.months
    if amount <= 0 or months <= 0:
        return None

    base_monthly = monthly_payment(amount, months, inputs.annual_rate)
    insurance_monthly = amount * (inputs.insurance_rate / 100) / 12 if inputs.insurance_rate else 0.0
    total_monthly = base_monthly + insurance_monthly

    schedule = amortization_schedule(
        amount=amount,
        months=months,
        annual_rate=inputs.annual_rate,
        monthly_payment=total_monthly,
        insurance_monthly=insurance_monthly,
    )

    total_cost = total_monthly * months + inputs.fees
    total_insurance = insurance_monthly * months
    total_interest = max(0.0, total_cost - inputs.fees - amount - total_insurance)
    apr = ((total_cost - amount) / amount) / (months / 12 or 1) * 100

    return SimulationResult(
        amount=amount,
        months=months,
        annual_rate=inputs.annual_rate,
        fees=inputs.fees,
        insurance_rate=inputs.insurance_rate,
        monthly_payment=round_currency(total_monthly),
        base_monthly_payment=round_currency(base_monthly),
        insurance_monthly=round_currency(insurance_monthly),
        total_cost=round_currency(total_cost),
        total_interest=round_currency(total_interest),
        total_insurance=round_currency(total_insurance),
        apr=round_currency(apr),
        amortization=tuple(schedule),
    )


def slice_amortization(schedule: Sequence[Any], limit: Optional[int] = None) -> List[Any]:
    """First `limit` rows of a schedule; the whole schedule when no limit applies."""
    if not schedule:
        return []
    if not limit or limit >= len(schedule):
        return list(schedule)
    return list(schedule[:limit])
