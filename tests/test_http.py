import pytest
from fastapi.testclient import TestClient

from orderly import cache as C
from orderly.config import Settings
from orderly.wire import create_app

API_KEY = "secret"
AUTH = {"Authorization": API_KEY}


@pytest.fixture
def make_client(db_url):
    def make(*tiers):
        settings = Settings(database_url=db_url, api_key=API_KEY, log_file=None)
        app = create_app(settings, cache_tiers=tiers or (C.LocalTier[str](),))
        return TestClient(app)

    return make


@pytest.fixture
def client(make_client):
    with make_client() as c:
        yield c


def create(client, amount=99.99):
    return client.post("/order/create", json={"amount": amount}, headers=AUTH)


# ═══════════════════════════════════════════════════════════════════════════════
# Order Flow
# ═══════════════════════════════════════════════════════════════════════════════


class TestOrderFlow:
    def test_create_get_pay(self, client):
        created = create(client)
        assert created.status_code == 200
        body = created.json()
        assert body["order_no"].startswith("ORD")
        assert body["amount"] == 99.99
        assert body["status"] == "PENDING"
        assert body["paid_at"] is None

        fetched = client.get(f"/order/get/{body['order_no']}", headers=AUTH)
        assert fetched.status_code == 200
        assert fetched.json() == body

        paid = client.post("/order/pay", json={"order_no": body["order_no"]}, headers=AUTH)
        assert paid.status_code == 200
        assert paid.json()["status"] == "PAID"
        assert paid.json()["paid_at"] is not None

        again = client.post("/order/pay", json={"order_no": body["order_no"]}, headers=AUTH)
        assert again.status_code == 400
        assert again.json() == {"error": "Already paid"}

        after = client.get(f"/order/get/{body['order_no']}", headers=AUTH)
        assert after.json()["status"] == "PAID"

    def test_unknown_order(self, client):
        for response in (
            client.get("/order/get/ORDdoesnotexist", headers=AUTH),
            client.post("/order/pay", json={"order_no": "ORDdoesnotexist"}, headers=AUTH),
            client.delete("/order/delete/ORDdoesnotexist", headers=AUTH),
        ):
            assert response.status_code == 404
            assert response.json() == {"error": "Order not found"}

    def test_delete(self, client):
        order_no = create(client).json()["order_no"]

        deleted = client.delete(f"/order/delete/{order_no}", headers=AUTH)
        assert deleted.status_code == 200
        assert deleted.json() == {"deleted": True, "order_no": order_no}

        assert client.get(f"/order/get/{order_no}", headers=AUTH).status_code == 404

    def test_list_filters_by_status(self, client):
        pending = create(client, 1).json()["order_no"]
        paid = create(client, 2).json()["order_no"]
        client.post("/order/pay", json={"order_no": paid}, headers=AUTH)

        everything = client.get("/order/list", headers=AUTH)
        assert everything.status_code == 200
        assert {o["order_no"] for o in everything.json()["orders"]} == {pending, paid}

        only_paid = client.get("/order/list", params={"status": "PAID"}, headers=AUTH)
        assert [o["order_no"] for o in only_paid.json()["orders"]] == [paid]

        blank = client.get("/order/list?status=", headers=AUTH)
        assert len(blank.json()["orders"]) == 2

    def test_list_empty(self, client):
        response = client.get("/order/list", headers=AUTH)
        assert response.status_code == 200
        assert response.json() == {"orders": []}


# ═══════════════════════════════════════════════════════════════════════════════
# Bad Requests
# ═══════════════════════════════════════════════════════════════════════════════


class TestBadRequests:
    @pytest.mark.parametrize("amount", [0, -5, 10**400, "12", True, None])
    def test_invalid_amount(self, client, amount):
        response = create(client, amount)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_missing_amount(self, client):
        response = client.post("/order/create", json={}, headers=AUTH)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing amount"}

    def test_malformed_json(self, client):
        response = client.post(
            "/order/create",
            content=b"{not json",
            headers={**AUTH, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    @pytest.mark.parametrize("body", [{}, {"order_no": ""}])
    def test_pay_without_order_no(self, client, body):
        response = client.post("/order/pay", json=body, headers=AUTH)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing order_no"}

    def test_pay_with_non_string_order_no(self, client):
        response = client.post("/order/pay", json={"order_no": 123}, headers=AUTH)
        assert response.status_code == 400


# ═══════════════════════════════════════════════════════════════════════════════
# Auth and Service Endpoints
# ═══════════════════════════════════════════════════════════════════════════════


class TestAuth:
    def test_missing_key_is_unauthorized(self, client):
        response = client.post("/order/create", json={"amount": 1})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_wrong_key_is_unauthorized(self, client):
        response = client.get("/order/list", headers={"Authorization": "nope"})
        assert response.status_code == 401

    def test_healthcheck_is_public(self, client):
        response = client.get("/healthcheck")
        assert response.status_code == 200
        assert response.text == "OK"

    def test_unknown_route(self, client):
        response = client.get("/nope", headers=AUTH)
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "code": 404}


class TestMetrics:
    def test_counts_requests_and_orders(self, client):
        order_no = create(client).json()["order_no"]
        client.get(f"/order/get/{order_no}", headers=AUTH)
        client.post("/order/pay", json={"order_no": order_no}, headers=AUTH)

        response = client.get("/metrics")
        assert response.status_code == 200
        counters = response.json()
        assert counters["orders_created"] == 1
        assert counters["orders_paid"] == 1
        assert counters["cache_hits"] == 1
        assert counters["total_requests"] == 4


# ═══════════════════════════════════════════════════════════════════════════════
# Cache Failures
# ═══════════════════════════════════════════════════════════════════════════════


class TestCacheFailures:
    def test_create_fails_when_cache_is_down(self, make_client, failing_tier):
        with make_client(failing_tier()) as client:
            response = create(client)
            assert response.status_code == 500
            assert response.json() == {"error": "Internal server error"}

            # the row was still written
            listed = client.get("/order/list", headers=AUTH).json()["orders"]
            assert len(listed) == 1
            assert listed[0]["status"] == "PENDING"

    def test_get_survives_cache_errors(self, make_client, failing_tier):
        with make_client(failing_tier(get=True, set=False, delete=False)) as client:
            order_no = create(client).json()["order_no"]
            response = client.get(f"/order/get/{order_no}", headers=AUTH)
            assert response.status_code == 200
            assert response.json()["order_no"] == order_no

    def test_pay_fails_when_cache_delete_fails(self, make_client, failing_tier):
        with make_client(failing_tier(get=False, set=False, delete=True)) as client:
            order_no = create(client).json()["order_no"]
            response = client.post("/order/pay", json={"order_no": order_no}, headers=AUTH)
            assert response.status_code == 500
            assert response.json() == {"error": "Internal server error"}

            pending = client.get("/order/list", params={"status": "PENDING"}, headers=AUTH)
            assert [o["order_no"] for o in pending.json()["orders"]] == [order_no]

    def test_delete_ignores_cache_delete_failure(self, make_client, failing_tier):
        with make_client(failing_tier(get=False, set=False, delete=True)) as client:
            order_no = create(client).json()["order_no"]
            response = client.delete(f"/order/delete/{order_no}", headers=AUTH)
            assert response.status_code == 200
            assert response.json()["deleted"] is True
