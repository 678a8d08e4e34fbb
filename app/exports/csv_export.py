"""
CSV export of credit applications for the admin dashboard.
"""
import csv
import io
from typing import Any, Iterable

HEADERS = [
    "ID",
    "Name",
    "Email",
    "Phone",
    "Monthly income",
    "Credit type",
    "Amount",
    "Duration (months)",
    "Monthly payment",
    "Status",
    "Priority",
    "Created at",
]


def _cell(value: Any) -> Any:
    return "" if value is None else value


def application_row(application: Any) -> list:
    simulation = getattr(application, "simulation", None)
    credit_type = getattr(application, "credit_type", None)
    created_at = application.created_at
    status = getattr(application.status, "value", application.status)
    return [
        application.id,
        application.full_name,
        application.email,
        application.phone,
        application.monthly_income,
        credit_type.label if credit_type is not None else application.credit_type_id,
        _cell(getattr(simulation, "amount", None)),
        _cell(getattr(simulation, "months", None)),
        _cell(getattr(simulation, "monthly_payment", None)),
        status,
        "Yes" if application.priority else "No",
        created_at.isoformat() if created_at else "",
    ]


def applications_to_csv(applications: Iterable[Any]) -> bytes:
    """Every cell quoted, CRLF line endings, UTF-8 encoded."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(HEADERS)
    for application in applications:
        writer.writerow([_cell(value) for value in application_row(application)])
    return buffer.getvalue().encode("utf-8")
