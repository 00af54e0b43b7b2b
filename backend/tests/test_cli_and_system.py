"""
CLI command and system endpoint tests.
"""

from backoffice.models import ChartOfAccount, Customer, Employee, LeadStatus, TaxRate


class TestCli:

    def test_seed_demo_is_idempotent(self, app, db_session):
        runner = app.test_cli_runner()

        result = runner.invoke(args=["seed", "demo"])
        assert result.exit_code == 0, result.output
        assert "PASS Demo data ready" in result.output
        assert db_session.query(Customer).count() == 3
        assert db_session.query(TaxRate).filter_by(name="VAT").one().rate == 15
        assert db_session.query(Employee).filter_by(employee_code="EMP-0001").count() == 1
        assert db_session.query(ChartOfAccount).filter_by(code="4000").one().type == "revenue"
        assert [s.name for s in db_session.query(LeadStatus).order_by(LeadStatus.order)] == ["New", "Qualified", "Lost"]

        result = runner.invoke(args=["seed", "demo"])
        assert result.exit_code == 0, result.output
        assert "(0 records created)" in result.output
        assert db_session.query(Customer).count() == 3

    def test_resources_list(self, app):
        result = app.test_cli_runner().invoke(args=["resources", "list"])
        assert result.exit_code == 0
        assert "/api/pos/tax-rates" in result.output
        assert "terminal.name" in result.output
        assert "/api/accounting/journals" in result.output
        assert "month=" in result.output

    def test_init_db(self, app, db_session):
        result = app.test_cli_runner().invoke(args=["system", "init-db"])
        assert result.exit_code == 0
        assert "PASS" in result.output


class TestSystemEndpoints:

    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "healthy"
        assert body["checks"]["database"]["status"] == "healthy"

    def test_resource_catalog(self, client):
        resources = client.get("/api/resources").get_json()["resources"]
        paths = {r["path"] for r in resources}
        assert len(resources) == 43
        assert {"/api/pos/tax-rates", "/api/pos/sales", "/api/employees", "/api/shifts"} <= paths
        assert {"/api/attendance", "/api/leave-applications", "/api/payrolls", "/api/employee-documents"} <= paths
        assert {"/api/crm/leads", "/api/crm/customers", "/api/crm/tickets"} <= paths
        assert {"/api/accounting/accounts", "/api/accounting/journals"} <= paths

        customers = next(r for r in resources if r["name"] == "customers")
        assert customers["search_fields"] == ["name", "phone", "email"]
        assert "phone" in customers["fields"]

        payrolls = next(r for r in resources if r["name"] == "payrolls")
        assert payrolls["exact_search_fields"] == ["month", "year"]
        journals = next(r for r in resources if r["name"] == "journals")
        assert journals["filters"] == ["start_date", "end_date"]

    def test_unknown_route_is_json(self, client):
        resp = client.get("/api/nowhere")
        assert resp.status_code == 404
        assert resp.get_json() == {"success": False, "message": "Resource not found"}

    def test_wrong_method_is_json(self, client):
        resp = client.patch("/api/pos/tax-rates")
        assert resp.status_code == 405
        assert resp.get_json()["success"] is False

    def test_cors_for_allowed_origin(self, app, client, monkeypatch):
        monkeypatch.setitem(app.config, "CORS_ALLOWED_ORIGINS", {"http://dashboard.test"})
        resp = client.get("/api/health", headers={"Origin": "http://dashboard.test"})
        assert resp.headers["Access-Control-Allow-Origin"] == "http://dashboard.test"

        resp = client.get("/api/health", headers={"Origin": "http://evil.test"})
        assert "Access-Control-Allow-Origin" not in resp.headers

    def test_unexpected_failure_is_enveloped(self, client, monkeypatch):
        from backoffice.services import resource_service

        def boom(*args, **kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(resource_service, "list_records", boom)
        resp = client.get("/api/products")
        assert resp.status_code == 500
        assert resp.get_json() == {"success": False, "message": "Internal server error"}
