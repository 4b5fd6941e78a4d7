# storefront/services/cart_service.py
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.cart import Cart, CartItem
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartItemCreate,
    CartItemRead,
    CartItemUpdate,
    CartRead,
    CartSummary,
)
from storefront.services.pricing import final_unit_price

logger = logging.getLogger(__name__)


class CartService:
    """
    Business logic for session carts.

    Responsibilities:
      - resolve (or lazily create) the cart for a session
      - validate product existence before adding
      - snapshot unit_price when a product first enters the cart
      - map repository not-found / invalid-quantity signals to HTTP errors
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # ---- public operations ----

    def get_cart(
        self,
        session: Session,
        session_id: str,
        user_id: int | None = None,
    ) -> Cart:
        cart = self.cart_repo.get_by_session_id(session, session_id)
        if cart is None:
            cart = self.cart_repo.get_or_create_cart(session, session_id, user_id)
            logger.info("Created cart %s for session %s", cart.id, session_id)
        return cart

    def get_cart_summary(
        self,
        session: Session,
        session_id: str,
        user_id: int | None = None,
    ) -> CartSummary:
        """
        Return the session's cart, its items and the running total.
        """
        cart = self.get_cart(session, session_id, user_id)
        items = self.cart_repo.list_items(session, cart.id)
        total = self.cart_repo.get_cart_total(session, cart.id)

        return CartSummary(
            cart=CartRead.model_validate(cart),
            items=[CartItemRead.model_validate(it) for it in items],
            total=total,
        )

    def add_item(
        self,
        session: Session,
        session_id: str,
        payload: CartItemCreate,
        user_id: int | None = None,
    ) -> CartItem:
        """
        Add a product to the session's cart.

        Rules:
          - product must exist (404 otherwise)
          - an existing line is incremented, keeping its original unit_price
          - unit_price defaults to the current discounted catalog price
        """
        product = self.product_repo.get_by_id(session, payload.product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        unit_price = payload.unit_price
        if unit_price is None:
            unit_price = final_unit_price(product.price, product.discount)

        cart = self.get_cart(session, session_id, user_id)

        try:
            return self.cart_repo.add_item(
                session,
                cart_id=cart.id,
                product_id=payload.product_id,
                quantity=payload.quantity,
                unit_price=unit_price,
            )
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

    def update_item_quantity(
        self,
        session: Session,
        cart_item_id: int,
        payload: CartItemUpdate,
    ) -> CartItem:
        """
        Set an item's quantity. A zero quantity is rejected (400),
        never interpreted as removal.
        """
        try:
            item = self.cart_repo.update_item_quantity(
                session, cart_item_id, payload.quantity
            )
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

        if item is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart item not found",
            )
        return item

    def remove_item(self, session: Session, cart_item_id: int) -> None:
        if not self.cart_repo.remove_item(session, cart_item_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart item not found",
            )
