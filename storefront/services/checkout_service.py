# storefront/services/checkout_service.py
import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.config import get_settings
from storefront.models.order import Order, OrderDetail
from storefront.models.product import Product
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.checkout import (
    CartCheckoutRequest,
    CartValidateRequest,
    CartValidation,
    CheckoutCommand,
    CheckoutLine,
    CheckoutRequest,
    CheckoutResult,
    ValidatedLine,
)
from storefront.schemas.order import OrderDetailRead, OrderRead
from storefront.services.pricing import final_unit_price, line_subtotal, order_total

settings = get_settings()
logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Turns a list of requested lines into one Order plus its OrderDetails.

    Responsibilities:
      - fail-fast validation before any write
      - snapshot unit prices (caller-supplied or discounted catalog price)
      - insert order + details in one transaction; roll back on any failure
      - clear the source cart after commit (cart checkout only, best-effort)
      - read-only pricing preview sharing the same formula
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ):
        self.order_repo = order_repo
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # -------- Entry points --------

    def checkout_items(
        self,
        session: Session,
        payload: CheckoutRequest,
    ) -> CheckoutResult:
        """
        Checkout an ad-hoc item list (client cart held in the browser).

        Lines with unit_price are client-priced, the rest are priced
        from the catalog.
        """
        now = datetime.now(timezone.utc)
        command = CheckoutCommand(
            branch_id=payload.branch_id,
            name=payload.order_name or f"Order – {now:%b} {now.day}, {now:%Y}",
            description=(
                payload.order_description
                if payload.order_description is not None
                else f"Order placed on {now:%Y-%m-%d %H:%M:%S} UTC"
            ),
            order_date=now,
            lines=[
                CheckoutLine(
                    product_id=it.product_id,
                    quantity=it.quantity,
                    unit_price=it.unit_price,
                )
                for it in payload.items
            ],
        )
        return self.checkout(session, command)

    def checkout_cart(
        self,
        session: Session,
        session_id: str,
        payload: CartCheckoutRequest,
    ) -> CheckoutResult:
        """
        Checkout the session's persisted cart using its snapshotted prices.

        The cart is cleared only after the order has been committed; a
        failure to clear is logged and does not undo the order.
        """
        cart = self.cart_repo.get_or_create_cart(session, session_id)
        cart_items = self.cart_repo.list_items(session, cart.id)
        if not cart_items:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cart is empty",
            )

        command = CheckoutCommand(
            branch_id=payload.branch_id,
            name=payload.order_name or settings.CART_ORDER_NAME,
            description=payload.order_description or "",
            lines=[
                CheckoutLine(
                    product_id=ci.product_id,
                    quantity=ci.quantity,
                    unit_price=ci.unit_price,
                )
                for ci in cart_items
            ],
        )
        result = self.checkout(session, command)

        try:
            self.cart_repo.clear_cart(session, cart.id)
        except Exception:
            session.rollback()
            logger.warning(
                "Order %s placed but cart %s could not be cleared",
                result.order.id,
                cart.id,
                exc_info=True,
            )

        return result

    # -------- The transaction --------

    def checkout(self, session: Session, command: CheckoutCommand) -> CheckoutResult:
        """
        Create the order and its details atomically.

        Steps:
          1. Validate branch and lines (before any write).
          2. Load every referenced product; 404 naming the first missing one.
          3. Insert Order (status='pending').
          4. For each line, in input order: resolve unit price, insert detail.
          5. Commit; on any failure roll back and re-raise.
        """
        self._validate_command(command)

        products = self.product_repo.get_many(
            session, [line.product_id for line in command.lines]
        )
        for line in command.lines:
            if line.product_id not in products:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Product {line.product_id} not found",
                )

        try:
            order = Order(
                branch_id=command.branch_id,
                order_date=command.order_date or datetime.now(timezone.utc),
                name=command.name,
                description=command.description,
                status="pending",
            )
            order = self.order_repo.create_order(session, order)

            details: list[OrderDetail] = []
            for line in command.lines:
                detail = OrderDetail(
                    order_id=order.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price=self._resolve_unit_price(line, products[line.product_id]),
                    notes="",
                )
                details.append(self.order_repo.create_detail(session, detail))

            session.commit()
        except Exception:
            session.rollback()
            logger.exception("Checkout for branch %s rolled back", command.branch_id)
            raise

        session.refresh(order)
        logger.info(
            "Order %s committed with %d line(s)", order.id, len(details)
        )
        return self._build_result(order, details)

    # -------- Read-only preview --------

    def validate_cart(
        self,
        session: Session,
        payload: CartValidateRequest,
    ) -> CartValidation:
        """
        Price a list of lines without touching any cart.

        Uses the same discount formula as server-priced checkout.
        """
        lines: list[ValidatedLine] = []

        for it in payload.items:
            product = self.product_repo.get_by_id(session, it.product_id)
            if not product:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Product {it.product_id} not found",
                )

            discount = product.discount or 0
            final_price = final_unit_price(product.price, discount)
            lines.append(
                ValidatedLine(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=it.quantity,
                    unit_price=product.price,
                    discount=discount,
                    final_price=final_price,
                    subtotal=line_subtotal(final_price, it.quantity),
                )
            )

        return CartValidation(
            items=lines,
            total=order_total(line.subtotal for line in lines),
        )

    # -------- Helpers --------

    def _validate_command(self, command: CheckoutCommand) -> None:
        if not command.branch_id or command.branch_id <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Branch ID is required",
            )
        if not command.lines:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="At least one item is required",
            )
        for line in command.lines:
            if line.quantity <= 0:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Invalid quantity for product {line.product_id}",
                )

    def _resolve_unit_price(self, line: CheckoutLine, product: Product) -> float:
        if line.unit_price is not None:
            return line.unit_price
        return final_unit_price(product.price, product.discount)

    def _build_result(
        self,
        order: Order,
        details: list[OrderDetail],
    ) -> CheckoutResult:
        detail_dtos = [
            OrderDetailRead(
                id=d.id,
                order_id=d.order_id,
                product_id=d.product_id,
                quantity=d.quantity,
                unit_price=d.unit_price,
                notes=d.notes,
                subtotal=line_subtotal(d.unit_price, d.quantity),
            )
            for d in details
        ]
        return CheckoutResult(
            order=OrderRead.model_validate(order),
            details=detail_dtos,
            total=order_total(d.subtotal for d in detail_dtos),
        )
