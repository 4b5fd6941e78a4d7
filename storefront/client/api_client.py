# storefront/client/api_client.py
from typing import Any

import httpx


class CheckoutError(Exception):
    """
    The order was not placed. The shopper's cart must stay as it was.
    """

    def __init__(self, message: str, status_code: int | None = None, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class ValidationFailed(CheckoutError):
    """
    The API rejected the request (400/404): fixable by the shopper.
    """


class StorefrontClient:
    """
    Thin wrapper over the storefront HTTP API.

    Takes an httpx.Client so the session cookie is kept between calls;
    FastAPI's TestClient can be passed in directly.
    """

    def __init__(self, http: httpx.Client, api_prefix: str = "/api"):
        self.http = http
        self.api_prefix = api_prefix.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.api_prefix}{path}"

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            resp = self.http.request(method, self._url(path), **kwargs)
        except httpx.HTTPError as e:
            raise CheckoutError(f"Request to {path} failed: {e}") from e

        if resp.status_code in (400, 404):
            raise ValidationFailed(
                _detail_message(resp), status_code=resp.status_code, detail=_json(resp)
            )
        if resp.is_error:
            raise CheckoutError(
                _detail_message(resp), status_code=resp.status_code, detail=_json(resp)
            )
        return resp

    # ---- session cart ----

    def get_cart(self) -> dict:
        return self._send("GET", "/carts").json()

    def add_item(self, product_id: int, quantity: int, unit_price: float | None = None) -> dict:
        body: dict[str, Any] = {"productId": product_id, "quantity": quantity}
        if unit_price is not None:
            body["unitPrice"] = unit_price
        return self._send("POST", "/carts/items", json=body).json()

    def update_item(self, cart_item_id: int, quantity: int) -> dict:
        return self._send(
            "PUT", f"/carts/items/{cart_item_id}", json={"quantity": quantity}
        ).json()

    def remove_item(self, cart_item_id: int) -> None:
        self._send("DELETE", f"/carts/items/{cart_item_id}")

    def checkout_cart(
        self,
        branch_id: int,
        order_name: str | None = None,
        order_description: str | None = None,
    ) -> dict:
        body: dict[str, Any] = {"branchId": branch_id}
        if order_name is not None:
            body["orderName"] = order_name
        if order_description is not None:
            body["orderDescription"] = order_description
        return self._send("POST", "/carts/checkout", json=body).json()

    # ---- stateless pricing / checkout ----

    def validate(self, items: list[dict]) -> dict:
        return self._send("POST", "/cart/validate", json={"items": items}).json()

    def checkout_items(self, branch_id: int, items: list[dict], **extra: Any) -> dict:
        body = {"branchId": branch_id, "items": items, **extra}
        return self._send("POST", "/orders/checkout", json=body).json()

    # ---- orders ----

    def list_orders(self) -> list[dict]:
        return self._send("GET", "/orders").json()

    def get_order(self, order_id: int) -> dict:
        return self._send("GET", f"/orders/{order_id}").json()


def _json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


def _detail_message(resp: httpx.Response) -> str:
    body = _json(resp)
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return f"HTTP {resp.status_code}"
