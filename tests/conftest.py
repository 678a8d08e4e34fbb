from typing import Any, Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.database import Base, get_db
from app.auth.service import create_admin
from app.catalog.service import seed_catalog

# Setup In-Memory Database for Testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_EMAIL = "reviewer@selefni.ma"
ADMIN_PASSWORD = "password123"


def override_get_db() -> Generator[Any, None, None]:
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture()
def db_session() -> Generator[Any, None, None]:
    """Fresh schema with seeded catalog and one admin for every test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    seed_catalog(db)
    create_admin(db, ADMIN_EMAIL, ADMIN_PASSWORD)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session: Any) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def admin_headers(client: TestClient) -> Dict[str, str]:
    response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def catalog(client: TestClient) -> Dict[str, Any]:
    """First credit type, job and employment type from the seeded catalog."""
    credit_types = client.get("/catalog/credit-types").json()
    jobs = client.get("/catalog/jobs").json()
    employment_types = client.get("/catalog/employment-types").json()
    return {
        "credit_type": credit_types[0],
        "job": jobs[0],
        "employment_type": employment_types[0],
    }


@pytest.fixture()
def simulation(client: TestClient, catalog: Dict[str, Any]) -> Dict[str, Any]:
    payload = {
        "credit_type_id": catalog["credit_type"]["id"],
        "job_id": catalog["job"]["id"],
        "amount": 100000,
        "months": 24,
        "annual_rate": 5,
        "fees": 500,
        "insurance_rate": 0,
    }
    response = client.post("/simulations", json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def application_payload(simulation: Dict[str, Any], catalog: Dict[str, Any]) -> Callable[..., Dict[str, Any]]:
    """Builds a valid application body; keyword arguments override fields."""
    def build(**overrides: Any) -> Dict[str, Any]:
        payload = {
            "simulation_id": simulation["id"],
            "full_name": "Amina Benali",
            "email": "amina.benali@mail.com",
            "phone": "+212 600 112 233",
            "monthly_income": 15000,
            "employment_type_id": catalog["employment_type"]["id"],
            "job_id": catalog["job"]["id"],
            "comment": "Car purchase",
        }
        payload.update(overrides)
        return payload

    return build
