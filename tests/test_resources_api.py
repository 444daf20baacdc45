# =============================================================================
# tests/test_resources_api.py - Protected Resource Endpoint Tests
# =============================================================================
# Covers the auth interceptor (401), the role gate (403), the resource
# handlers, prescription uploads and the unmatched-route fallback.
# =============================================================================

import base64
import json
import logging
import re
from datetime import timedelta

import pytest
from fastapi import Depends, Request
from fastapi.testclient import TestClient

from app.auth import get_current_user
from core.models.roles import Role, Table
from lib.supabase_client import StoreError
from lib.tokens import TokenIssuer
from tests.conftest import TEST_SECRET

LIST_PATHS = [
    ("/api/patients", Table.PATIENTS),
    ("/api/doctors", Table.DOCTORS),
    ("/api/asha", Table.ASHA_WORKERS),
    ("/api/pharmacies", Table.PHARMACIES),
    ("/api/appointments", Table.APPOINTMENTS),
    ("/api/inventory", Table.INVENTORY),
    ("/api/prescriptions", Table.PRESCRIPTIONS),
]

APPOINTMENT = {
    "patient_id": "P-1",
    "doctor_id": "D-1",
    "asha_id": "A-1",
    "appointment_date": "2025-03-01T10:00:00",
    "status": "scheduled",
}

INVENTORY_ITEM = {
    "pharmacy_user_id": "PH-1",
    "medicine_name": "Paracetamol 500mg",
    "description": "Strip of 10",
    "stock": 120,
    "price": 25.5,
    "expiry_date": "2026-12-31",
}


def _tampered(token: str, **changes) -> str:
    header, payload, signature = token.split(".")
    claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    claims.update(changes)
    new_payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return ".".join([header, new_payload, signature])


# =============================================================================
# Authentication (401)
# =============================================================================

class TestAuthentication:
    @pytest.mark.parametrize("path,table", LIST_PATHS)
    def test_no_token(self, client, store, path, table):
        response = client.get(path)

        assert response.status_code == 401
        assert response.json() == {"error": "Access denied"}
        assert store.calls == []

    @pytest.mark.parametrize("path,table", LIST_PATHS)
    def test_expired_token(self, client, store, path, table):
        expired = TokenIssuer(TEST_SECRET, ttl=timedelta(seconds=-60)).issue("P-1", Role.PATIENT)

        response = client.get(path, headers={"Authorization": f"Bearer {expired}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}
        assert store.calls == []

    def test_tampered_token(self, client, store, tokens):
        token = _tampered(tokens.issue("P-1", Role.PATIENT), role="doctor")

        response = client.get("/api/patients", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert store.calls == []

    def test_token_signed_with_other_secret(self, client, store):
        token = TokenIssuer("some-other-secret-value").issue("P-1", Role.PATIENT)

        response = client.get("/api/doctors", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert store.calls == []

    def test_non_bearer_scheme(self, client, store):
        response = client.get("/api/doctors", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401
        assert store.calls == []

    def test_no_token_on_gated_post_is_401_not_403(self, client, store):
        response = client.post("/api/appointments", json=APPOINTMENT)

        assert response.status_code == 401
        assert store.calls == []

    def test_malformed_body_without_token_never_reaches_store(self, client, store):
        response = client.post(
            "/api/appointments",
            content=b"{\"patient_id\": ",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Malformed JSON body"}
        assert store.calls == []

    def test_identity_attached_to_request(self, app, auth_header):
        @app.get("/api/_whoami", dependencies=[Depends(get_current_user)])
        def whoami(request: Request):
            user = request.state.user
            return {"id": user.id, "role": user.role.value}

        with TestClient(app) as test_client:
            response = test_client.get("/api/_whoami", headers=auth_header(Role.ASHA, "A-9"))

        assert response.status_code == 200
        assert response.json() == {"id": "A-9", "role": "asha"}


# =============================================================================
# Listings
# =============================================================================

class TestListings:
    @pytest.mark.parametrize("path,table", LIST_PATHS)
    def test_any_role_can_list(self, client, store, auth_header, path, table):
        store.tables[table] = [{"id": 1, "name": "row"}]

        for role in Role:
            response = client.get(path, headers=auth_header(role))
            assert response.status_code == 200
            assert response.json() == [{"id": 1, "name": "row"}]

    def test_empty_table(self, client, auth_header):
        response = client.get("/api/inventory", headers=auth_header(Role.PATIENT))

        assert response.status_code == 200
        assert response.json() == []

    def test_store_error(self, client, store, auth_header):
        def broken(table):
            raise StoreError('relation "public.inventory" does not exist', table=table)

        store.select_all = broken

        response = client.get("/api/inventory", headers=auth_header(Role.PATIENT))

        assert response.status_code == 400
        assert response.json() == {"error": 'relation "public.inventory" does not exist'}


# =============================================================================
# Appointments
# =============================================================================

class TestAppointments:
    def test_doctor_forbidden(self, client, store, auth_header):
        response = client.post(
            "/api/appointments", json=APPOINTMENT, headers=auth_header(Role.DOCTOR)
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden: Insufficient role"}
        assert store.calls == []

    def test_forbidden_logs_code_and_required_role(self, client, auth_header, caplog):
        with caplog.at_level(logging.INFO, logger="app.exceptions"):
            response = client.post(
                "/api/appointments", json=APPOINTMENT, headers=auth_header(Role.ASHA)
            )

        assert response.json() == {"error": "Forbidden: Insufficient role"}
        assert "[FORBIDDEN]" in caplog.text
        assert "'required_role': 'patient'" in caplog.text

    def test_patient_creates(self, client, store, auth_header):
        response = client.post(
            "/api/appointments", json=APPOINTMENT, headers=auth_header(Role.PATIENT, "P-1")
        )

        assert response.status_code == 200
        row = response.json()
        for field, value in APPOINTMENT.items():
            assert row[field] == value
        assert store.calls == [("insert", Table.APPOINTMENTS)]

    def test_missing_field(self, client, auth_header):
        body = {k: v for k, v in APPOINTMENT.items() if k != "doctor_id"}

        response = client.post(
            "/api/appointments", json=body, headers=auth_header(Role.PATIENT)
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required field: doctor_id"}

    def test_optional_fields_not_sent_to_store(self, client, store, auth_header):
        body = {k: v for k, v in APPOINTMENT.items() if k not in ("asha_id", "status")}

        response = client.post(
            "/api/appointments", json=body, headers=auth_header(Role.PATIENT)
        )

        assert response.status_code == 200
        stored = store.tables[Table.APPOINTMENTS][0]
        assert "asha_id" not in stored
        assert "status" not in stored

    def test_numeric_ids_returned_unchanged(self, client, store, auth_header):
        body = {**APPOINTMENT, "patient_id": 5, "doctor_id": 7, "asha_id": 9}

        response = client.post(
            "/api/appointments", json=body, headers=auth_header(Role.PATIENT, "5")
        )

        assert response.status_code == 200
        assert response.json()["patient_id"] == 5
        assert response.json()["doctor_id"] == 7
        assert store.tables[Table.APPOINTMENTS][0]["asha_id"] == 9


# =============================================================================
# Inventory
# =============================================================================

class TestInventory:
    @pytest.mark.parametrize("role", [Role.PATIENT, Role.DOCTOR, Role.ASHA])
    def test_non_pharmacy_forbidden(self, client, store, auth_header, role):
        response = client.post("/api/inventory", json=INVENTORY_ITEM, headers=auth_header(role))

        assert response.status_code == 403
        assert store.calls == []

    def test_pharmacy_creates(self, client, auth_header):
        response = client.post(
            "/api/inventory", json=INVENTORY_ITEM, headers=auth_header(Role.PHARMACY, "PH-1")
        )

        assert response.status_code == 200
        row = response.json()
        for field, value in INVENTORY_ITEM.items():
            assert row[field] == value

    def test_values_stored_as_sent(self, client, store, auth_header):
        body = {**INVENTORY_ITEM, "pharmacy_user_id": 42, "stock": "120", "price": "25.50"}

        response = client.post(
            "/api/inventory", json=body, headers=auth_header(Role.PHARMACY)
        )

        assert response.status_code == 200
        stored = store.tables[Table.INVENTORY][0]
        assert stored["pharmacy_user_id"] == 42
        assert stored["stock"] == "120"
        assert stored["price"] == "25.50"
        assert response.json()["price"] == "25.50"

    def test_store_error(self, client, store, auth_header, caplog):
        store.fail_inserts = 'new row for relation "inventory" violates check constraint "stock_positive"'

        with caplog.at_level(logging.WARNING, logger="app.exceptions"):
            response = client.post(
                "/api/inventory", json=INVENTORY_ITEM, headers=auth_header(Role.PHARMACY)
            )

        assert response.status_code == 400
        assert response.json() == {
            "error": 'new row for relation "inventory" violates check constraint "stock_positive"'
        }
        assert "[STORE_ERROR]" in caplog.text
        assert "'table': 'inventory'" in caplog.text


# =============================================================================
# Prescriptions
# =============================================================================

class TestPrescriptions:
    FORM = {"patient_id": "P-1", "doctor_id": "D-1", "notes": "after meals"}

    def test_upload(self, client, store, auth_header):
        content = b"%PDF-1.4 prescription body"

        response = client.post(
            "/api/prescriptions",
            data=self.FORM,
            files={"file": ("scan.pdf", content, "application/pdf")},
            headers=auth_header(Role.DOCTOR, "D-1"),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Prescription uploaded successfully"

        prescription = body["prescription"]
        key = prescription["file_name"]
        assert re.fullmatch(r"[0-9a-f\-]{36}\.pdf", key)
        assert key == f"{prescription['prescription_id']}.pdf"
        assert prescription["file_size"] == len(content)
        assert prescription["mime_type"] == "application/pdf"
        assert prescription["patient_id"] == "P-1"
        assert prescription["notes"] == "after meals"

        assert store.objects[("prescriptions", key)] == (content, "application/pdf")

    def test_patient_forbidden(self, client, store, auth_header):
        response = client.post(
            "/api/prescriptions",
            data=self.FORM,
            files={"file": ("scan.pdf", b"x", "application/pdf")},
            headers=auth_header(Role.PATIENT),
        )

        assert response.status_code == 403
        assert store.calls == []

    def test_missing_file(self, client, store, auth_header):
        response = client.post(
            "/api/prescriptions", data=self.FORM, headers=auth_header(Role.DOCTOR)
        )

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}
        assert store.calls == []

    def test_upload_failure(self, client, store, auth_header):
        store.fail_uploads = "The resource already exists"

        response = client.post(
            "/api/prescriptions",
            data=self.FORM,
            files={"file": ("scan.pdf", b"x", "application/pdf")},
            headers=auth_header(Role.DOCTOR),
        )

        assert response.status_code == 500
        assert response.json() == {"error": "File upload failed"}
        assert ("insert", Table.PRESCRIPTIONS) not in store.calls


# =============================================================================
# Routing
# =============================================================================

class TestRouting:
    def test_unknown_route(self, client):
        response = client.get("/api/nonexistent")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found: /api/nonexistent"}

    def test_unknown_method_on_known_path(self, client):
        response = client.delete("/api/patients")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found: /api/patients"}

    def test_no_public_route_besides_signup_and_login(self, client, store):
        response = client.get("/api/health")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found: /api/health"}
        assert store.calls == []
