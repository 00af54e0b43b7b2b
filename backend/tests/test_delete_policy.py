"""
Delete policy tests.

"allow" (default) deletes and leaves referencing rows in place;
"restrict" refuses with 409 and counts the referencing rows per table.
"""

import pytest

from backoffice.models import Customer, CustomerAddress, Sale
from backoffice.services.resource_service import find_dependents


@pytest.fixture
def sale(db_session, terminal, customer):
    sale = Sale(
        invoice_no="SALE-20240101-0001",
        terminal_id=terminal.id,
        customer_id=customer.id,
        total_amount=10,
        payable_amount=10,
        payment_status="paid",
        status="completed",
    )
    db_session.add(sale)
    db_session.add(CustomerAddress(customer_id=customer.id, address="1 Marina Rd", city="Lagos", country="NG"))
    db_session.commit()
    return sale


class TestAllowPolicy:

    def test_delete_leaves_dependents(self, client, db_session, sale, customer):
        customer_id = customer.id
        sale_id = sale.id

        resp = client.delete(f"/api/pos/customers/{customer_id}")
        assert resp.status_code == 200

        db_session.expire_all()
        assert db_session.get(Sale, sale_id).customer_id == customer_id

        data = client.get(f"/api/pos/sales/{sale_id}").get_json()["data"]
        assert data["customer"] is None


class TestRestrictPolicy:

    def test_find_dependents(self, db_session, sale, customer):
        assert find_dependents(Customer, customer.id) == {"sales": 1, "customer_addresses": 1}

    def test_referenced_record_is_kept(self, app, client, db_session, sale, customer, monkeypatch):
        monkeypatch.setitem(app.config, "DELETE_POLICY", "restrict")
        customer_id = customer.id

        resp = client.delete(f"/api/pos/customers/{customer_id}")
        assert resp.status_code == 409
        body = resp.get_json()
        assert body["success"] is False
        assert body["dependents"] == {"sales": 1, "customer_addresses": 1}

        assert client.get(f"/api/pos/customers/{customer_id}").status_code == 200

    def test_unreferenced_record_is_deleted(self, app, client, db_session, customer_group, monkeypatch):
        monkeypatch.setitem(app.config, "DELETE_POLICY", "restrict")
        resp = client.post("/api/pos/customers", json={"name": "Jo", "phone": "555"})
        customer_id = resp.get_json()["data"]["id"]

        resp = client.delete(f"/api/pos/customers/{customer_id}")
        assert resp.status_code == 200
