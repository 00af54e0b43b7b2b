"""
Customer resource tests.

Verifies:
- Required phone, nullable email, customer group hydration
- Delete then show returns 404
- Partial update leaves untouched fields alone
- Unique phone with self-exclusion on update
- Integer fields bounded to the 64-bit range
- updated_at moves on update; id and created_at are never writable
"""

from datetime import datetime

import pytest

from backoffice.models import Customer


PATH = "/api/pos/customers"


class TestCustomerScenario:

    def test_create_requires_phone(self, client):
        resp = client.post(PATH, json={"name": "Jo"})
        assert resp.status_code == 422
        body = resp.get_json()
        assert body["message"] == "Validation failed"
        assert body["errors"]["phone"] == ["The phone field is required."]

    def test_create_delete_then_show(self, client):
        resp = client.post(PATH, json={"name": "Jo", "phone": "555", "email": None})
        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["name"] == "Jo"
        assert data["email"] is None
        assert "customergroup" in data
        assert data["customergroup"] is None
        assert data["created_at"].endswith("Z")

        resp = client.delete(f"{PATH}/{data['id']}")
        assert resp.status_code == 200
        assert resp.get_json() == {"success": True, "message": "Customer deleted successfully"}

        resp = client.get(f"{PATH}/{data['id']}")
        assert resp.status_code == 404
        assert resp.get_json() == {"success": False, "message": "Customer not found"}


class TestCustomerWrites:

    def test_show_returns_supplied_values(self, client, customer_group):
        payload = {
            "name": "Bulk Traders Ltd",
            "phone": "08059876543",
            "email": "orders@bulktraders.example",
            "customer_group_id": customer_group.id,
            "loyalty_points": 40,
        }
        created = client.post(PATH, json=payload).get_json()["data"]

        shown = client.get(f"{PATH}/{created['id']}").get_json()["data"]
        for key, value in payload.items():
            assert shown[key] == value
        assert shown["customergroup"]["name"] == "Retail"
        assert shown["addresses"] == []

    def test_partial_update_keeps_other_fields(self, client, customer):
        resp = client.put(f"{PATH}/{customer.id}", json={"email": "amina@example.com"})
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["email"] == "amina@example.com"
        assert data["name"] == "Amina Yusuf"
        assert data["phone"] == "08031234567"

    def test_post_to_id_updates(self, client, customer):
        resp = client.post(f"{PATH}/{customer.id}", json={"name": "Amina Y."})
        assert resp.status_code == 200
        assert resp.get_json()["data"]["name"] == "Amina Y."

    def test_duplicate_phone_rejected(self, client, customer):
        resp = client.post(PATH, json={"name": "Other", "phone": "08031234567"})
        assert resp.status_code == 422
        assert resp.get_json()["errors"]["phone"] == ["The phone has already been taken."]

    def test_update_keeps_own_phone(self, client, customer):
        resp = client.put(f"{PATH}/{customer.id}", json={"phone": "08031234567"})
        assert resp.status_code == 200

    def test_update_to_taken_phone_rejected(self, client, customer):
        other = client.post(PATH, json={"name": "Other", "phone": "0800"}).get_json()["data"]

        resp = client.put(f"{PATH}/{other['id']}", json={"phone": "08031234567"})
        assert resp.status_code == 422
        assert "phone" in resp.get_json()["errors"]

    def test_invalid_email_and_long_phone_reported_together(self, client):
        resp = client.post(PATH, json={"name": "Jo", "phone": "1" * 21, "email": "not-an-email"})
        assert resp.status_code == 422
        errors = resp.get_json()["errors"]
        assert errors["phone"] == ["The phone field must not be greater than 20 characters."]
        assert errors["email"] == ["The email field must be a valid email address."]

    def test_update_missing_record(self, client):
        resp = client.put(f"{PATH}/999", json={"name": "Ghost"})
        assert resp.status_code == 404

    def test_delete_missing_record(self, client):
        resp = client.delete(f"{PATH}/999")
        assert resp.status_code == 404

    @pytest.mark.parametrize("field,value", [
        ("customer_group_id", 10 ** 30),
        ("loyalty_points", 10 ** 20),
        ("loyalty_points", -(2 ** 63) - 1),
        ("loyalty_points", str(10 ** 20)),
    ])
    def test_integer_out_of_range_rejected(self, client, field, value):
        resp = client.post(PATH, json={"name": "Jo", "phone": "555", field: value})
        assert resp.status_code == 422
        label = field.replace("_", " ")
        assert resp.get_json()["errors"][field] == [f"The {label} field must be an integer."]

    def test_largest_integer_accepted(self, client):
        resp = client.post(PATH, json={"name": "Jo", "phone": "555", "loyalty_points": 2 ** 63 - 1})
        assert resp.status_code == 201
        assert resp.get_json()["data"]["loyalty_points"] == 2 ** 63 - 1


class TestCustomerTimestamps:

    def test_update_advances_updated_at(self, client, db_session, customer):
        old = datetime(2020, 1, 1, 8, 30)
        customer.created_at = old
        customer.updated_at = old
        db_session.commit()

        resp = client.put(f"{PATH}/{customer.id}", json={"name": "Amina Y."})
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["created_at"] == "2020-01-01T08:30:00Z"
        assert data["updated_at"] > data["created_at"]

        db_session.expire_all()
        row = db_session.get(Customer, customer.id)
        assert row.updated_at > old
        assert row.created_at == old

    def test_id_and_created_at_in_payload_are_ignored(self, client, db_session, customer):
        customer_id = customer.id
        created_at = client.get(f"{PATH}/{customer_id}").get_json()["data"]["created_at"]

        resp = client.put(f"{PATH}/{customer_id}", json={
            "id": customer_id + 100,
            "created_at": "1999-01-01T00:00:00Z",
            "updated_at": "1999-01-01T00:00:00Z",
            "name": "Amina Y.",
        })
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["id"] == customer_id
        assert data["created_at"] == created_at
        assert data["updated_at"] != "1999-01-01T00:00:00Z"

        assert client.get(f"{PATH}/{customer_id + 100}").status_code == 404
        assert client.get(f"{PATH}/{customer_id}").get_json()["data"]["name"] == "Amina Y."
