"""
Tests: cart session cookie and optional bearer identity.
"""

from jose import jwt

from storefront.core import auth
from storefront.core.config import get_settings
from storefront.core.session import new_session_id

settings = get_settings()


class TestSessionCookie:

    def test_new_session_ids_are_unique(self):
        assert new_session_id() != new_session_id()

    def test_existing_cookie_is_reused(self, client):
        client.cookies.set(settings.CART_SESSION_COOKIE, "session_known")

        body = client.get("/api/carts").json()

        assert body["cart"]["sessionId"] == "session_known"

    def test_different_sessions_get_different_carts(self, client, products):
        client.cookies.set(settings.CART_SESSION_COOKIE, "session_one")
        client.post(
            "/api/carts/items",
            json={"productId": products["gadget"].id, "quantity": 1, "unitPrice": 25.5},
        )

        client.cookies.set(settings.CART_SESSION_COOKIE, "session_two")
        body = client.get("/api/carts").json()

        assert body["items"] == []


class TestBearerIdentity:

    def test_guest_cart_has_no_user(self, client):
        assert client.get("/api/carts").json()["cart"]["userId"] is None

    def test_token_sets_user_on_new_cart(self, client, monkeypatch):
        monkeypatch.setattr(auth.settings, "JWT_SECRET", "test-secret")
        token = jwt.encode({"sub": "7"}, "test-secret", algorithm="HS256")

        resp = client.get("/api/carts", headers={"Authorization": f"Bearer {token}"})

        assert resp.status_code == 200
        assert resp.json()["cart"]["userId"] == 7

    def test_bad_token_is_401(self, client, monkeypatch):
        monkeypatch.setattr(auth.settings, "JWT_SECRET", "test-secret")
        token = jwt.encode({"sub": "7"}, "other-secret", algorithm="HS256")

        resp = client.get("/api/carts", headers={"Authorization": f"Bearer {token}"})

        assert resp.status_code == 401

    def test_token_without_secret_is_401(self, client, monkeypatch):
        monkeypatch.setattr(auth.settings, "JWT_SECRET", None)

        resp = client.get("/api/carts", headers={"Authorization": "Bearer abc.def.ghi"})

        assert resp.status_code == 401
