"""
Integration Tests: /api/orders CRUD
"""

import pytest


def _create(client, **overrides):
    body = {"branchId": 1, "name": "Manual order", "description": "phone-in"}
    body.update(overrides)
    return client.post("/api/orders", json=body)


class TestOrderCrud:

    def test_create_defaults(self, client):
        resp = _create(client)

        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "pending"
        assert body["orderDate"]
        assert body["branchId"] == 1

    @pytest.mark.parametrize(
        "order_date",
        ["2024-05-01T10:00:00", "2024-05-01T10:00:00Z"],
    )
    def test_create_with_order_date(self, client, order_date):
        resp = _create(client, orderDate=order_date)

        assert resp.status_code == 201
        assert resp.json()["orderDate"].startswith("2024-05-01T10:00:00")

    def test_create_requires_branch(self, client):
        resp = client.post("/api/orders", json={"name": "No branch"})

        assert resp.status_code == 400

    def test_list_orders(self, client):
        _create(client, name="first")
        _create(client, name="second")

        body = client.get("/api/orders").json()

        assert [o["name"] for o in body] == ["second", "first"]

    def test_get_order_with_details(self, client, products):
        placed = client.post(
            "/api/orders/checkout",
            json={"branchId": 4, "items": [{"productId": products["gadget"].id, "quantity": 2}]},
        ).json()

        resp = client.get(f"/api/orders/{placed['order']['id']}")

        assert resp.status_code == 200
        body = resp.json()
        assert body["branchId"] == 4
        assert len(body["details"]) == 1
        assert body["details"][0]["quantity"] == 2
        assert body["total"] == 51.0

    def test_get_missing_order_is_404(self, client):
        resp = client.get("/api/orders/999")

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Order not found"

    def test_update_fields(self, client):
        order = _create(client).json()

        resp = client.put(
            f"/api/orders/{order['id']}",
            json={"name": "Renamed", "description": "changed", "branchId": 9},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "Renamed"
        assert body["description"] == "changed"
        assert body["branchId"] == 9

    @pytest.mark.parametrize(
        "path,allowed",
        [
            (["confirmed"], True),
            (["confirmed", "shipped"], True),
            (["canceled"], True),
            (["shipped"], False),
            (["canceled", "confirmed"], False),
        ],
    )
    def test_status_transitions(self, client, path, allowed):
        order = _create(client).json()

        codes = [
            client.put(f"/api/orders/{order['id']}", json={"status": s}).status_code
            for s in path
        ]

        if allowed:
            assert codes == [200] * len(path)
        else:
            assert codes[-1] == 400

    def test_update_missing_order_is_404(self, client):
        resp = client.put("/api/orders/999", json={"name": "x"})

        assert resp.status_code == 404

    def test_delete_order_and_details(self, client, engine, products):
        from sqlmodel import Session

        from storefront.repositories.order_repo import OrderRepository

        placed = client.post(
            "/api/orders/checkout",
            json={"branchId": 1, "items": [{"productId": products["gadget"].id, "quantity": 1}]},
        ).json()

        resp = client.delete(f"/api/orders/{placed['order']['id']}")

        assert resp.status_code == 204
        assert client.get(f"/api/orders/{placed['order']['id']}").status_code == 404
        with Session(engine) as s:
            assert OrderRepository().count_details(s) == 0

    def test_delete_missing_order_is_404(self, client):
        assert client.delete("/api/orders/999").status_code == 404


class TestProducts:

    def test_create_and_get(self, client):
        created = client.post(
            "/api/products", json={"name": "Sprocket", "price": 4.5, "discount": 0.1}
        )

        assert created.status_code == 201
        pid = created.json()["id"]
        body = client.get(f"/api/products/{pid}").json()
        assert body["name"] == "Sprocket"
        assert body["discount"] == 0.1

    def test_invalid_discount_is_400(self, client):
        resp = client.post("/api/products", json={"name": "Bad", "price": 1, "discount": 1})

        assert resp.status_code == 400

    def test_missing_product_is_404(self, client):
        assert client.get("/api/products/123").status_code == 404

    def test_list(self, client, products):
        assert len(client.get("/api/products").json()) == 3
