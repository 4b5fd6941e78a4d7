# storefront/client/checkout.py
import logging

from storefront.client.api_client import CheckoutError, StorefrontClient
from storefront.client.cart_state import CartState
from storefront.core.config import get_settings

logger = logging.getLogger(__name__)

FAILED_MESSAGE = "Failed to place order. Please try again."


def place_order(
    state: CartState,
    client: StorefrontClient,
    branch_id: int | None = None,
    order_name: str | None = None,
    order_description: str | None = None,
) -> dict:
    """
    Submit the shopper's cart to /orders/checkout.

    Without a branch_id the order goes to DEFAULT_BRANCH_ID.
    The cart is cleared only when the order was created. On any failure
    it is left exactly as it was and CheckoutError is raised with a
    generic, shopper-facing message.
    """
    if state.is_empty():
        raise CheckoutError("Your cart is empty")

    if branch_id is None:
        branch_id = get_settings().DEFAULT_BRANCH_ID

    items = [
        {
            "productId": line.product_id,
            "quantity": line.quantity,
            "unitPrice": line.final_price,
        }
        for line in state.lines
    ]
    extra = {}
    if order_name:
        extra["orderName"] = order_name
    if order_description:
        extra["orderDescription"] = order_description

    try:
        result = client.checkout_items(branch_id, items, **extra)
    except CheckoutError as e:
        logger.error(f"Checkout error: {e.message} (status {e.status_code})")
        raise type(e)(FAILED_MESSAGE, status_code=e.status_code, detail=e.detail) from e

    state.clear()
    return result
