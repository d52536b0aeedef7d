"""
Integration Tests for Admin Endpoints
"""
import pytest

pytestmark = pytest.mark.integration

SEEDED_REVENUE = 99000 + 249000 + 799000 + 249000 + 99000 + 186750


class TestAdminAccess:
    """Every admin route needs a session (401) carrying admin rights (403)"""

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/admin/users"),
        ("get", "/api/admin/discount-codes"),
        ("get", "/api/admin/transactions"),
        ("get", "/api/admin/revenue"),
        ("get", "/api/admin/logs"),
        ("get", "/api/admin/system/status"),
        ("put", "/api/admin/pricing/plans/plan_pro"),
        ("delete", "/api/admin/discount-codes/code_1"),
    ])
    def test_regular_user_forbidden(self, client, user_headers, method, path):
        kwargs = {"json": {}} if method == "put" else {}
        assert getattr(client, method)(path, **kwargs).status_code == 401
        response = getattr(client, method)(path, headers=user_headers, **kwargs)
        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"


class TestAdminUsers:

    def test_lists_users(self, client, user_headers, admin_headers):
        response = client.get("/api/admin/users", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        emails = [u["email"] for u in data["items"]]
        assert "u1@example.com" in emails
        assert "admin@aivoice.studio" in emails
        assert data["total"] == len(data["items"])


class TestAdminPricing:

    def test_update_plan(self, client, admin_headers):
        response = client.put("/api/admin/pricing/plans/plan_pro", json={"price": 199000}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["price"] == 199000
        plans = client.get("/api/pricing/plans").json()
        assert next(p for p in plans if p["id"] == "plan_pro")["price"] == 199000

    def test_invalid_price(self, client, admin_headers):
        response = client.put("/api/admin/pricing/plans/plan_pro", json={"price": -1}, headers=admin_headers)
        assert response.status_code == 400

    def test_unknown_plan(self, client, admin_headers):
        response = client.put("/api/admin/pricing/plans/plan_x", json={"price": 1}, headers=admin_headers)
        assert response.status_code == 404


class TestAdminDiscountCodes:

    def test_crud(self, client, admin_headers):
        created = client.post(
            "/api/admin/discount-codes",
            json={"code": "newyear", "discount_percent": 30, "expiry_date": "2099-01-01"},
            headers=admin_headers
        )
        assert created.status_code == 201
        code = created.json()
        assert code["code"] == "NEWYEAR"
        assert code["status"] == "active"

        updated = client.put(
            f"/api/admin/discount-codes/{code['id']}",
            json={"discount_percent": 40},
            headers=admin_headers
        )
        assert updated.json()["discount_percent"] == 40

        assert client.delete(f"/api/admin/discount-codes/{code['id']}", headers=admin_headers).status_code == 204
        codes = client.get("/api/admin/discount-codes", headers=admin_headers).json()
        assert code["id"] not in [c["id"] for c in codes]

    def test_seeded_codes_report_status(self, client, admin_headers):
        codes = client.get("/api/admin/discount-codes", headers=admin_headers).json()
        old = next(c for c in codes if c["code"] == "OLDCODE")
        assert old["status"] == "expired"

    def test_duplicate_code(self, client, admin_headers):
        body = {"code": "OLDCODE", "discount_percent": 5, "expiry_date": "2099-01-01"}
        response = client.post("/api/admin/discount-codes", json=body, headers=admin_headers)
        assert response.status_code == 400


class TestAdminRevenue:

    def test_revenue_from_seeded_transactions(self, client, admin_headers):
        data = client.get("/api/admin/revenue", headers=admin_headers).json()

        assert data["total_revenue"] == SEEDED_REVENUE
        assert data["total_transactions"] == 6
        assert len(data["recent_transactions"]) == 5
        assert data["revenue_by_plan"][0]["name"] == "Doanh nghiệp"

    def test_all_transactions(self, client, admin_headers):
        txns = client.get("/api/admin/transactions", headers=admin_headers).json()
        assert len(txns) == 6
        assert txns[0]["id"] == "txn_6"


class TestAdminSystem:

    def test_logs(self, client, admin_headers):
        response = client.get("/api/admin/logs?limit=10", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()) <= 10

    def test_system_status(self, client, admin_headers):
        data = client.get("/api/admin/system/status", headers=admin_headers).json()
        assert data["running"] is True
        assert set(data["jobs"]) == {"queued", "processing", "completed", "failed"}
