"""
PDF summary of a simulation: loan terms, applicant details and the first rows
of the amortization schedule.
"""
from io import BytesIO
from typing import Any, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.exports.formatters import PLACEHOLDER, FormatterRegistry, format_date, format_percent, format_status
from app.simulation.engine import slice_amortization

GRID_STYLE = TableStyle([
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
])

HEADED_GRID_STYLE = TableStyle([
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1f3a5f")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#eef2f7")]),
    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
])


def _field(row: Any, name: str) -> Any:
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def _label(entity: Any, fallback: Any) -> str:
    if entity is not None and getattr(entity, "label", None):
        return entity.label
    return PLACEHOLDER if fallback is None else str(fallback)


def summary_rows(simulation: Any, formatters: FormatterRegistry, currency: Optional[str]) -> List[List[str]]:
    def money(value: Any) -> str:
        return formatters.currency(value, currency)

    return [
        ["Credit type", _label(getattr(simulation, "credit_type", None), getattr(simulation, "credit_type_id", None))],
        ["Amount", money(simulation.amount)],
        ["Duration (months)", str(simulation.months)],
        ["Annual rate", format_percent(simulation.annual_rate)],
        ["Insurance", format_percent(simulation.insurance_rate or 0)],
        ["Fixed fees", money(simulation.fees or 0)],
        ["Monthly payment", money(simulation.monthly_payment)],
        ["Total cost", money(simulation.total_cost)],
        ["APR (approx.)", format_percent(simulation.apr)],
    ]


def applicant_rows(application: Any, formatters: FormatterRegistry, currency: Optional[str]) -> List[List[str]]:
    return [
        ["Applicant", "Value"],
        ["Full name", application.full_name],
        ["Email", application.email],
        ["Phone", application.phone],
        ["Monthly income", formatters.currency(application.monthly_income, currency)],
        ["Employment", _label(getattr(application, "employment_type", None), application.employment_type_id)],
        ["Job", _label(getattr(application, "job", None), application.job_id)],
        ["Comment", application.comment or PLACEHOLDER],
        ["Status", format_status(application.status)],
        ["Priority", "Yes" if application.priority else "No"],
        ["Created at", format_date(application.created_at)],
    ]


def amortization_rows(schedule: Any, formatters: FormatterRegistry, currency: Optional[str], limit: int) -> List[List[str]]:
    rows = [["Month", "Payment", "Interest", "Principal", "Insurance", "Remaining"]]
    for entry in slice_amortization(schedule or [], limit):
        rows.append([
            str(_field(entry, "month")),
            formatters.currency(_field(entry, "payment"), currency),
            formatters.currency(_field(entry, "interest"), currency),
            formatters.currency(_field(entry, "principal"), currency),
            formatters.currency(_field(entry, "insurance"), currency),
            formatters.currency(_field(entry, "remaining_balance"), currency),
        ])
    return rows


def simulation_to_pdf(
    simulation: Any,
    formatters: FormatterRegistry,
    application: Optional[Any] = None,
    currency: Optional[str] = None,
    row_limit: int = 24,
) -> bytes:
    """Renders the simulation (and optionally its application) as an A4 PDF document."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"Simulation {getattr(simulation, 'id', None) or ''}".strip(),
    )
    styles = getSampleStyleSheet()

    story: List[Any] = [
        Paragraph("Credit simulation summary", styles["Title"]),
        Paragraph(f"Simulation #{getattr(simulation, 'id', None) or 'N/A'}", styles["Heading3"]),
        Spacer(1, 4 * mm),
        Table(summary_rows(simulation, formatters, currency), colWidths=[60 * mm, 90 * mm], style=GRID_STYLE),
    ]

    if application is not None:
        story += [
            Spacer(1, 8 * mm),
            Table(applicant_rows(application, formatters, currency), colWidths=[60 * mm, 90 * mm],
                  style=HEADED_GRID_STYLE, repeatRows=1),
        ]

    schedule = amortization_rows(getattr(simulation, "amortization", None), formatters, currency, row_limit)
    if len(schedule) > 1:
        story += [
            Spacer(1, 8 * mm),
            Paragraph("Amortization schedule", styles["Heading3"]),
            Table(schedule, style=HEADED_GRID_STYLE, repeatRows=1),
        ]

    doc.build(story)
    return buffer.getvalue()
