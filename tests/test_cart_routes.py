"""
Integration Tests: /api/carts

Session-keyed cart through the HTTP layer: cookie correlation,
add/update/remove, cart checkout and error mapping.
"""

import pytest
from sqlalchemy.exc import OperationalError

from storefront.core.config import get_settings
from storefront.repositories.cart_repo import CartRepository

settings = get_settings()


def _add(client, product_id, quantity=1, unit_price=None):
    body = {"productId": product_id, "quantity": quantity}
    if unit_price is not None:
        body["unitPrice"] = unit_price
    return client.post("/api/carts/items", json=body)


class TestGetCart:

    def test_first_access_creates_cart_and_sets_cookie(self, client):
        resp = client.get("/api/carts")

        assert resp.status_code == 200
        body = resp.json()
        assert body["items"] == []
        assert body["total"] == 0
        assert body["cart"]["sessionId"].startswith("session_")
        assert resp.cookies.get(settings.CART_SESSION_COOKIE) == body["cart"]["sessionId"]

    def test_same_cookie_same_cart(self, client):
        first = client.get("/api/carts").json()
        second = client.get("/api/carts").json()

        assert first["cart"]["id"] == second["cart"]["id"]

    def test_total_reflects_items(self, client, products):
        _add(client, products["widget"].id, 2, 80.0)
        _add(client, products["gadget"].id, 1, 25.5)

        body = client.get("/api/carts").json()

        assert len(body["items"]) == 2
        assert body["total"] == pytest.approx(185.5)


class TestAddItem:

    def test_add_returns_201_with_item(self, client, products):
        resp = _add(client, products["gadget"].id, 2, 25.5)

        assert resp.status_code == 201
        body = resp.json()
        assert body["productId"] == products["gadget"].id
        assert body["quantity"] == 2
        assert body["unitPrice"] == 25.5
        assert "cartItemId" not in body
        assert body["id"] > 0

    def test_add_twice_increments(self, client, products):
        _add(client, products["gadget"].id, 1, 25.5)
        resp = _add(client, products["gadget"].id, 4, 25.5)

        assert resp.json()["quantity"] == 5
        assert len(client.get("/api/carts").json()["items"]) == 1

    def test_price_defaults_to_discounted_catalog_price(self, client, products):
        resp = _add(client, products["widget"].id, 1)

        assert resp.json()["unitPrice"] == 80.0

    def test_snake_case_body_is_accepted(self, client, products):
        resp = client.post(
            "/api/carts/items",
            json={"product_id": products["gadget"].id, "quantity": 1, "unit_price": 25.5},
        )

        assert resp.status_code == 201

    def test_unknown_product_is_404(self, client, products):
        resp = _add(client, 9999, 1, 10.0)

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Product not found"

    @pytest.mark.parametrize(
        "body",
        [
            {"quantity": 1, "unitPrice": 1.0},
            {"productId": 1, "quantity": 0, "unitPrice": 1.0},
            {"productId": 1, "quantity": -2, "unitPrice": 1.0},
            {"productId": 1, "quantity": 1, "unitPrice": 0},
        ],
    )
    def test_invalid_body_is_400(self, client, products, body):
        resp = client.post("/api/carts/items", json=body)

        assert resp.status_code == 400
        assert resp.json()["detail"]


class TestUpdateAndRemove:

    def test_update_quantity(self, client, products):
        item = _add(client, products["gadget"].id, 1, 25.5).json()

        resp = client.put(f"/api/carts/items/{item['id']}", json={"quantity": 7})

        assert resp.status_code == 200
        assert resp.json()["quantity"] == 7

    def test_update_to_zero_is_rejected_and_item_kept(self, client, products):
        item = _add(client, products["gadget"].id, 3, 25.5).json()

        resp = client.put(f"/api/carts/items/{item['id']}", json={"quantity": 0})

        assert resp.status_code == 400
        items = client.get("/api/carts").json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 3

    def test_update_missing_item_is_404(self, client):
        resp = client.put("/api/carts/items/4242", json={"quantity": 1})

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Cart item not found"

    def test_remove_item(self, client, products):
        item = _add(client, products["gadget"].id, 1, 25.5).json()

        resp = client.delete(f"/api/carts/items/{item['id']}")

        assert resp.status_code == 204
        assert client.get("/api/carts").json()["items"] == []

    def test_remove_missing_item_is_404(self, client):
        resp = client.delete("/api/carts/items/4242")

        assert resp.status_code == 404


class TestCartCheckout:

    def test_checkout_creates_order_and_clears_cart(self, client, products):
        _add(client, products["widget"].id, 2, 80.0)
        _add(client, products["gadget"].id, 1, 25.5)

        resp = client.post(
            "/api/carts/checkout",
            json={"branchId": 3, "orderName": "Weekly restock", "orderDescription": "dock B"},
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["order"]["branchId"] == 3
        assert body["order"]["name"] == "Weekly restock"
        assert body["order"]["description"] == "dock B"
        assert body["order"]["status"] == "pending"
        assert [d["productId"] for d in body["details"]] == [
            products["widget"].id,
            products["gadget"].id,
        ]
        assert [d["unitPrice"] for d in body["details"]] == [80.0, 25.5]
        assert body["total"] == pytest.approx(185.5)

        cart = client.get("/api/carts").json()
        assert cart["items"] == []
        assert cart["total"] == 0

    def test_checkout_uses_cart_snapshot_price(self, client, products):
        _add(client, products["gadget"].id, 2, 20.0)

        body = client.post("/api/carts/checkout", json={"branchId": 1}).json()

        assert body["details"][0]["unitPrice"] == 20.0

    def test_default_order_name(self, client, products):
        _add(client, products["gadget"].id, 1, 25.5)

        body = client.post("/api/carts/checkout", json={"branchId": 1}).json()

        assert body["order"]["name"] == settings.CART_ORDER_NAME
        assert body["order"]["description"] == ""

    def test_empty_cart_is_400(self, client):
        resp = client.post("/api/carts/checkout", json={"branchId": 1})

        assert resp.status_code == 400
        assert resp.json()["detail"] == "Cart is empty"
        assert client.get("/api/orders").json() == []

    def test_missing_branch_is_400(self, client, products):
        _add(client, products["gadget"].id, 1, 25.5)

        resp = client.post("/api/carts/checkout", json={})

        assert resp.status_code == 400
        assert len(client.get("/api/carts").json()["items"]) == 1

    def test_failed_clear_does_not_undo_order(self, client, products, monkeypatch):
        _add(client, products["gadget"].id, 1, 25.5)

        def broken_clear(self, session, cart_id):
            raise OperationalError("DELETE FROM cart_items", {}, Exception("disk I/O error"))

        monkeypatch.setattr(CartRepository, "clear_cart", broken_clear)

        resp = client.post("/api/carts/checkout", json={"branchId": 1})

        assert resp.status_code == 201
        order_id = resp.json()["order"]["id"]
        assert client.get(f"/api/orders/{order_id}").status_code == 200
        assert len(client.get("/api/carts").json()["items"]) == 1
