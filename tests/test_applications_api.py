"""
API tests for credit applications, the admin review workflow and notifications.
"""
from typing import Any, Callable, Dict

from fastapi.testclient import TestClient

AppPayload = Callable[..., Dict[str, Any]]


def _submit(client: TestClient, application_payload: AppPayload, **overrides: Any) -> Dict[str, Any]:
    response = client.post("/applications", json=application_payload(**overrides))
    assert response.status_code == 201
    return response.json()


def test_submit_application(client: TestClient, application_payload: AppPayload, simulation: Dict[str, Any]):
    application = _submit(client, application_payload)

    assert application["status"] == "pending"
    assert application["priority"] is False
    assert application["notes"] == []
    assert application["phone"] == "+212600112233"
    assert application["credit_type_id"] == simulation["credit_type_id"]
    assert [entry["status"] for entry in application["status_history"]] == ["pending"]

    detail = client.get(f"/applications/{application['id']}").json()
    assert detail["simulation"]["id"] == simulation["id"]
    assert detail["job"]["label"]


def test_submit_requires_existing_simulation(client: TestClient, application_payload: AppPayload):
    response = client.post("/applications", json=application_payload(simulation_id=999))
    assert response.status_code == 404


def test_submit_validates_fields(client: TestClient, application_payload: AppPayload):
    assert client.post("/applications", json=application_payload(email="not-an-email")).status_code == 422
    assert client.post("/applications", json=application_payload(monthly_income="abc")).status_code == 422
    assert client.post("/applications", json=application_payload(full_name="   ")).status_code == 422


def test_submission_notifies_admins(
    client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str]
):
    application = _submit(client, application_payload)

    feed = client.get("/admin/notifications", headers=admin_headers).json()
    assert feed["unread_count"] == 1
    notification = feed["notifications"][0]
    assert notification["type"] == "NEW_APPLICATION"
    assert notification["application_id"] == application["id"]
    assert notification["title"] == "New application from Amina Benali"

    response = client.patch(f"/admin/notifications/{notification['id']}/seen", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["seen"] is True
    assert client.get("/admin/notifications", headers=admin_headers).json()["unread_count"] == 0


def test_mark_all_notifications_seen(
    client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str]
):
    _submit(client, application_payload)
    _submit(client, application_payload, full_name="Youssef Alami", email="youssef@mail.com")

    response = client.post("/admin/notifications/seen-all", headers=admin_headers)
    assert response.json() == {"updated": 2}
    assert client.get("/admin/notifications", headers=admin_headers).json()["unread_count"] == 0


def test_admin_endpoints_require_authentication(client: TestClient):
    assert client.get("/admin/applications").status_code == 401
    assert client.get("/admin/notifications").status_code == 401
    assert client.get("/admin/applications", headers={"Authorization": "Bearer forged"}).status_code == 401


def test_admin_list_filters(client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str]):
    first = _submit(client, application_payload)
    second = _submit(client, application_payload, full_name="Youssef Alami", email="youssef@mail.com")
    client.patch(f"/admin/applications/{second['id']}/status", json={"status": "reviewing"}, headers=admin_headers)

    everything = client.get("/admin/applications", headers=admin_headers).json()
    assert {item["id"] for item in everything} == {first["id"], second["id"]}

    reviewing = client.get("/admin/applications", params={"status": "reviewing"}, headers=admin_headers).json()
    assert [item["id"] for item in reviewing] == [second["id"]]

    by_name = client.get("/admin/applications", params={"search": "AMINA"}, headers=admin_headers).json()
    assert [item["id"] for item in by_name] == [first["id"]]

    by_email = client.get("/admin/applications", params={"search": "youssef@"}, headers=admin_headers).json()
    assert [item["id"] for item in by_email] == [second["id"]]

    bad = client.get("/admin/applications", params={"status": "archived"}, headers=admin_headers)
    assert bad.status_code == 422


def test_status_change_appends_history(
    client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str]
):
    application = _submit(client, application_payload)
    url = f"/admin/applications/{application['id']}/status"

    updated = client.patch(url, json={"status": "accepted"}, headers=admin_headers).json()
    assert updated["status"] == "accepted"
    assert [entry["status"] for entry in updated["status_history"]] == ["pending", "accepted"]
    assert updated["status_history"][-1]["author"] == "reviewer@selefni.ma"

    # Same status again is a no-op
    unchanged = client.patch(url, json={"status": "accepted"}, headers=admin_headers).json()
    assert len(unchanged["status_history"]) == 2

    assert client.patch(url, json={"status": "archived"}, headers=admin_headers).status_code == 422
    assert client.patch("/admin/applications/missing/status", json={"status": "accepted"},
                        headers=admin_headers).status_code == 404


def test_priority_toggle(client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str]):
    application = _submit(client, application_payload)
    url = f"/admin/applications/{application['id']}/priority"

    assert client.post(url, headers=admin_headers).json()["priority"] is True
    assert client.post(url, headers=admin_headers).json()["priority"] is False


def test_add_note(client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str]):
    application = _submit(client, application_payload)
    url = f"/admin/applications/{application['id']}/notes"

    client.post(url, json={"content": "Payslips received"}, headers=admin_headers)
    updated = client.post(url, json={"content": "Called the applicant"}, headers=admin_headers).json()

    assert [note["content"] for note in updated["notes"]] == ["Payslips received", "Called the applicant"]
    assert updated["notes"][0]["author"] == "reviewer@selefni.ma"
    assert client.post(url, json={"content": "  "}, headers=admin_headers).status_code == 422


def test_csv_export(client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str]):
    application = _submit(client, application_payload)

    response = client.get("/admin/applications/export.csv", headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")

    lines = response.content.decode("utf-8").split("\r\n")
    assert lines[0].startswith('"ID","Name","Email"')
    assert lines[1].startswith(f'"{application["id"]}","Amina Benali"')
    assert '"4387.14"' in lines[1]


def test_pdf_export_with_applicant(
    client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str], simulation: Dict[str, Any]
):
    application = _submit(client, application_payload)

    response = client.get(
        f"/simulations/{simulation['id']}/pdf",
        params={"application_id": application["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")

    missing = client.get(f"/simulations/{simulation['id']}/pdf", params={"application_id": "nope"}, headers=admin_headers)
    assert missing.status_code == 404


def test_pdf_export_rejects_application_of_other_simulation(
    client: TestClient, application_payload: AppPayload, admin_headers: Dict[str, str], simulation: Dict[str, Any]
):
    application = _submit(client, application_payload)

    other_terms = {key: simulation[key] for key in ("credit_type_id", "job_id", "months", "annual_rate", "fees")}
    other = client.post("/simulations", json={**other_terms, "amount": 50000})
    assert other.status_code == 201

    response = client.get(
        f"/simulations/{other.json()['id']}/pdf",
        params={"application_id": application["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 404
