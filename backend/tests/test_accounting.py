"""
Accounting tests (chart of accounts, journal entries).

Verifies:
- Account codes are unique; accounts with posted lines cannot be deleted
- A journal entry needs at least two lines and must balance
- Lines are replaced on update and removed with their entry
- Journal listing honors the start_date / end_date window
"""

import pytest

from backoffice.models import JournalEntry, JournalItem


ACCOUNTS = "/api/accounting/accounts"
JOURNALS = "/api/accounting/journals"


@pytest.fixture
def accounts(client):
    cash = client.post(ACCOUNTS, json={"code": "1000", "name": "Cash", "type": "asset"}).get_json()["data"]
    sales = client.post(ACCOUNTS, json={"code": "4000", "name": "Sales Revenue", "type": "revenue"}).get_json()["data"]
    return cash, sales


def journal(cash, sales, amount=5000, **overrides):
    payload = {
        "date": "2024-02-10",
        "reference": "JV-001",
        "description": "Cash sales",
        "items": [
            {"chart_of_account_id": cash["id"], "debit": amount},
            {"chart_of_account_id": sales["id"], "credit": amount},
        ],
    }
    payload.update(overrides)
    return payload


# =============================================================================
# CHART OF ACCOUNTS
# =============================================================================


class TestAccounts:

    def test_create_defaults(self, client):
        resp = client.post(ACCOUNTS, json={"code": "1000", "name": "Cash", "type": "asset", "sub_type": "Current Asset"})
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["message"] == "Account created successfully"
        assert body["data"]["is_active"] is True
        assert body["data"]["opening_balance"] == 0

    def test_code_is_unique(self, client, accounts):
        resp = client.post(ACCOUNTS, json={"code": "1000", "name": "Petty Cash", "type": "asset"})
        assert resp.status_code == 422
        assert resp.get_json()["errors"]["code"] == ["The code has already been taken."]

        # An account may keep its own code
        cash, _ = accounts
        resp = client.put(f"{ACCOUNTS}/{cash['id']}", json={"code": "1000", "name": "Cash at Hand"})
        assert resp.status_code == 200

    def test_type_is_enumerated(self, client):
        resp = client.post(ACCOUNTS, json={"code": "9000", "name": "Misc", "type": "other"})
        assert resp.status_code == 422
        assert resp.get_json()["errors"]["type"] == ["The selected type is invalid."]

    def test_type_filter_and_search(self, client, accounts):
        data = client.get(ACCOUNTS, query_string={"type": "revenue"}).get_json()["pagination"]["data"]
        assert [row["code"] for row in data] == ["4000"]

        data = client.get(ACCOUNTS, query_string={"keyword": "100"}).get_json()["pagination"]["data"]
        assert [row["name"] for row in data] == ["Cash"]

    def test_account_with_lines_is_kept(self, client, accounts):
        cash, sales = accounts
        client.post(JOURNALS, json=journal(cash, sales))
        client.post(JOURNALS, json=journal(cash, sales, reference="JV-002"))

        resp = client.delete(f"{ACCOUNTS}/{cash['id']}")
        assert resp.status_code == 409
        assert resp.get_json()["dependents"] == {"journal_items": 2}
        assert client.get(f"{ACCOUNTS}/{cash['id']}").status_code == 200

    def test_unused_account_is_deleted(self, client, accounts):
        cash, _ = accounts
        resp = client.delete(f"{ACCOUNTS}/{cash['id']}")
        assert resp.status_code == 200
        assert client.get(f"{ACCOUNTS}/{cash['id']}").status_code == 404


# =============================================================================
# JOURNAL ENTRIES
# =============================================================================


class TestPostJournal:

    def test_balanced_entry_is_posted(self, client, accounts):
        cash, sales = accounts
        resp = client.post(JOURNALS, json=journal(cash, sales))
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["message"] == "Journal entry created successfully"

        data = body["data"]
        assert data["status"] == "posted"
        assert data["total_debit"] == 5000
        assert data["total_credit"] == 5000
        assert [item["account"]["code"] for item in data["items"]] == ["1000", "4000"]
        assert data["items"][1]["debit"] == 0

    def test_draft_status_kept(self, client, accounts):
        cash, sales = accounts
        resp = client.post(JOURNALS, json=journal(cash, sales, status="draft"))
        assert resp.get_json()["data"]["status"] == "draft"

    def test_unbalanced_entry_rejected(self, client, db_session, accounts):
        cash, sales = accounts
        payload = journal(cash, sales)
        payload["items"][1]["credit"] = 4000

        resp = client.post(JOURNALS, json=payload)
        assert resp.status_code == 422
        body = resp.get_json()
        assert body["message"] == "Journal entry is not balanced."
        assert body["errors"]["items"] == ["Total debit (5000.00) must equal total credit (4000.00)."]
        assert db_session.query(JournalEntry).count() == 0
        assert db_session.query(JournalItem).count() == 0

    def test_rounding_tolerance(self, client, accounts):
        cash, sales = accounts
        payload = journal(cash, sales, amount=100)
        payload["items"][1]["credit"] = 100.005

        resp = client.post(JOURNALS, json=payload)
        assert resp.status_code == 201

    @pytest.mark.parametrize("items", [None, [], "lines"])
    def test_two_lines_required(self, client, accounts, items):
        cash, sales = accounts
        payload = journal(cash, sales, items=items)

        resp = client.post(JOURNALS, json=payload)
        assert resp.status_code == 422
        assert resp.get_json()["errors"]["items"] == [
            "The items field is required and must contain at least 2 items."
        ]

    def test_single_line_rejected(self, client, accounts):
        cash, sales = accounts
        payload = journal(cash, sales)
        payload["items"] = payload["items"][:1]

        resp = client.post(JOURNALS, json=payload)
        assert resp.status_code == 422
        assert "items" in resp.get_json()["errors"]

    def test_line_errors_are_indexed(self, client, accounts):
        cash, sales = accounts
        payload = journal(cash, sales)
        payload["items"][0]["chart_of_account_id"] = 999
        payload["items"][1]["credit"] = -5

        resp = client.post(JOURNALS, json=payload)
        assert resp.status_code == 422
        errors = resp.get_json()["errors"]
        assert errors["items.0.chart_of_account_id"] == ["The selected chart of account id is invalid."]
        assert errors["items.1.credit"] == ["The credit field must be at least 0."]

    def test_header_and_line_errors_reported_together(self, client, accounts):
        cash, sales = accounts
        payload = journal(cash, sales)
        del payload["date"]
        payload["items"][1]["credit"] = 1

        resp = client.post(JOURNALS, json=payload)
        assert resp.status_code == 422
        body = resp.get_json()
        assert body["message"] == "Validation failed"
        assert body["errors"]["date"] == ["The date field is required."]
        assert "items" in body["errors"]


class TestUpdateJournal:

    def test_items_replace_every_line(self, client, db_session, accounts):
        cash, sales = accounts
        entry = client.post(JOURNALS, json=journal(cash, sales)).get_json()["data"]

        resp = client.put(f"{JOURNALS}/{entry['id']}", json={
            "items": [
                {"chart_of_account_id": cash["id"], "debit": 7500},
                {"chart_of_account_id": sales["id"], "credit": 7500},
            ],
        })
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["total_debit"] == 7500
        assert data["reference"] == "JV-001"
        assert len(data["items"]) == 2
        assert db_session.query(JournalItem).count() == 2

    def test_header_update_keeps_lines(self, client, db_session, accounts):
        cash, sales = accounts
        entry = client.post(JOURNALS, json=journal(cash, sales)).get_json()["data"]

        resp = client.put(f"{JOURNALS}/{entry['id']}", json={"description": "Cash sales (corrected)", "status": "draft"})
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["description"] == "Cash sales (corrected)"
        assert data["status"] == "draft"
        assert data["total_credit"] == 5000
        assert db_session.query(JournalItem).count() == 2

    def test_unbalanced_replacement_keeps_old_lines(self, client, db_session, accounts):
        cash, sales = accounts
        entry = client.post(JOURNALS, json=journal(cash, sales)).get_json()["data"]

        resp = client.put(f"{JOURNALS}/{entry['id']}", json={
            "items": [
                {"chart_of_account_id": cash["id"], "debit": 10},
                {"chart_of_account_id": sales["id"], "credit": 20},
            ],
        })
        assert resp.status_code == 422

        data = client.get(f"{JOURNALS}/{entry['id']}").get_json()["data"]
        assert data["total_debit"] == 5000


class TestDeleteJournal:

    def test_lines_are_deleted_with_entry(self, client, db_session, accounts):
        cash, sales = accounts
        entry = client.post(JOURNALS, json=journal(cash, sales)).get_json()["data"]

        resp = client.delete(f"{JOURNALS}/{entry['id']}")
        assert resp.status_code == 200
        assert db_session.query(JournalEntry).count() == 0
        assert db_session.query(JournalItem).count() == 0

    def test_own_lines_do_not_block_restrict(self, app, client, db_session, accounts, monkeypatch):
        monkeypatch.setitem(app.config, "DELETE_POLICY", "restrict")
        cash, sales = accounts
        entry = client.post(JOURNALS, json=journal(cash, sales)).get_json()["data"]

        resp = client.delete(f"{JOURNALS}/{entry['id']}")
        assert resp.status_code == 200
        assert db_session.query(JournalItem).count() == 0


class TestListJournals:

    @pytest.fixture
    def entries(self, client, accounts):
        cash, sales = accounts
        for day, reference in (("2024-01-15", "JV-JAN"), ("2024-02-10", "JV-FEB"), ("2024-03-05", "JV-MAR")):
            client.post(JOURNALS, json=journal(cash, sales, date=day, reference=reference))

    def test_date_window(self, client, entries):
        body = client.get(JOURNALS, query_string={"start_date": "2024-02-01", "end_date": "2024-03-05"}).get_json()
        assert body["message"] == "Journal entries fetched successfully"
        assert sorted(row["reference"] for row in body["pagination"]["data"]) == ["JV-FEB", "JV-MAR"]

        data = client.get(JOURNALS, query_string={"end_date": "2024-01-31"}).get_json()["pagination"]["data"]
        assert [row["reference"] for row in data] == ["JV-JAN"]

    def test_window_and_keyword_combine(self, client, entries):
        data = client.get(JOURNALS, query_string={"start_date": "2024-02-01", "keyword": "jan"}).get_json()["pagination"]["data"]
        assert data == []

    def test_list_hydrates_line_accounts(self, client, entries):
        data = client.get(JOURNALS, query_string={"keyword": "JV-FEB"}).get_json()["pagination"]["data"]
        assert [item["account"]["name"] for item in data[0]["items"]] == ["Cash", "Sales Revenue"]

    def test_invalid_window_date(self, client, entries):
        resp = client.get(JOURNALS, query_string={"start_date": "2024-13-01"})
        assert resp.status_code == 422
        assert resp.get_json()["errors"]["start_date"] == ["The start date field must be a valid date."]
