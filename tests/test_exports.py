"""
Unit tests for display formatting and the CSV/PDF exporters.
"""
import csv
import io
from datetime import datetime
from types import SimpleNamespace

import pytest
from app.exports.csv_export import HEADERS, applications_to_csv
from app.exports.formatters import FormatterRegistry, format_date, format_percent, format_status
from app.exports.pdf_export import amortization_rows, simulation_to_pdf
from app.simulation.engine import SimulationInput, simulate


@pytest.mark.parametrize("value, expected", [
    (1234.5, "1 234,50 MAD"),
    (0, "0,00 MAD"),
    ("987654.321", "987 654,32 MAD"),
    (-42.1, "-42,10 MAD"),
    (None, "-"),
    ("abc", "-"),
    (float("nan"), "-"),
])
def test_currency_formatting(value, expected):
    assert FormatterRegistry("MAD").currency(value) == expected


def test_registry_reuses_formatters_per_code():
    registry = FormatterRegistry()

    assert registry.get("eur") is registry.get("EUR")
    assert registry.currency(10, "EUR") == "10,00 €"
    assert registry.currency(10, "XOF") == "10,00 XOF"
    # Separate registries do not share state
    assert FormatterRegistry().get("EUR") is not registry.get("EUR")


@pytest.mark.parametrize("value, expected", [
    (5, "5.00 %"),
    (3.456, "3.46 %"),
    (None, "-"),
    ("x", "-"),
])
def test_percent_formatting(value, expected):
    assert format_percent(value) == expected


def test_date_and_status_formatting():
    assert format_date(datetime(2025, 3, 7, 14, 5)) == "07/03/2025 14:05"
    assert format_date("2025-03-07T14:05:00Z") == "07/03/2025 14:05"
    assert format_date("not a date") == "-"
    assert format_date(None) == "-"
    assert format_status("reviewing") == "Under review"
    assert format_status(None) == "Unknown"
    assert format_status("archived") == "archived"


def _application(**overrides):
    data = dict(
        id="app-1",
        full_name='Karim "KB" Berrada',
        email="karim@mail.com",
        phone="+212600000000",
        monthly_income=12000.0,
        credit_type_id=1,
        credit_type=SimpleNamespace(label="Personal loan"),
        simulation=SimpleNamespace(amount=50000.0, months=36, monthly_payment=1555.32),
        employment_type_id=1,
        employment_type=SimpleNamespace(label="Permanent contract"),
        job_id=1,
        job=SimpleNamespace(label="Engineer"),
        comment=None,
        status="pending",
        priority=True,
        created_at=datetime(2025, 1, 2, 9, 30),
    )
    data.update(overrides)
    return SimpleNamespace(**data)


def test_csv_export_quotes_every_cell():
    content = applications_to_csv([_application(), _application(id="app-2", priority=False, simulation=None)])
    text = content.decode("utf-8")

    assert text.startswith('"ID","Name"')
    assert "\r\n" in text
    assert '"Karim ""KB"" Berrada"' in text

    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == HEADERS
    assert rows[1][5] == "Personal loan"
    assert rows[1][6:9] == ["50000.0", "36", "1555.32"]
    assert rows[1][10] == "Yes"
    assert rows[2][6:9] == ["", "", ""]
    assert rows[2][10] == "No"


def test_csv_export_with_no_rows_has_header_only():
    rows = list(csv.reader(io.StringIO(applications_to_csv([]).decode("utf-8"))))
    assert rows == [HEADERS]


def _simulation(months=36):
    result = simulate(SimulationInput(amount=50000, months=months, annual_rate=6, fees=400, insurance_rate=0.3))
    data = result.to_dict()
    data.update(id=7, credit_type_id=1, credit_type=SimpleNamespace(label="Personal loan"))
    return SimpleNamespace(**data)


def test_pdf_amortization_table_is_capped():
    rows = amortization_rows(_simulation().amortization, FormatterRegistry(), None, 24)

    # Header + 24 months
    assert len(rows) == 25
    assert rows[1][0] == "1"
    assert rows[1][1].endswith("MAD")


def test_pdf_export_renders_document():
    content = simulation_to_pdf(_simulation(), FormatterRegistry(), application=_application(), currency="EUR")

    assert content.startswith(b"%PDF")
    assert len(content) > 1000


def test_pdf_export_without_application():
    content = simulation_to_pdf(_simulation(months=6), FormatterRegistry())
    assert content.startswith(b"%PDF")
