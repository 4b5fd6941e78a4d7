# storefront/services/order_service.py
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.order import Order, OrderDetail
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.order import (
    OrderCreate,
    OrderDetailRead,
    OrderUpdate,
    OrderWithDetailsRead,
)
from storefront.services.pricing import line_subtotal, order_total

# Allowed status transitions; anything else is a 400
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "canceled"},
    "confirmed": {"shipped", "canceled"},
    "shipped": set(),
    "canceled": set(),
}


class OrderService:
    """
    Administrative CRUD over orders.

    Checkout lives in CheckoutService; this service never creates
    order details.
    """

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    def list_orders(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        return self.order_repo.list_all(session, skip, limit)

    def get_order(self, session: Session, order_id: int) -> OrderWithDetailsRead:
        """
        Get a single order, including its details and total.

        - 404 if order not found.
        """
        order = self._get_or_404(session, order_id)
        details = self.order_repo.list_details_for_order(session, order.id)
        return self._build_order_with_details_dto(order, details)

    def create_order(self, session: Session, payload: OrderCreate) -> Order:
        order = Order(
            branch_id=payload.branch_id,
            order_date=payload.order_date or datetime.now(timezone.utc),
            name=payload.name,
            description=payload.description,
            status=payload.status,
        )
        order = self.order_repo.create_order(session, order)
        session.commit()
        session.refresh(order)
        return order

    def update_order(
        self,
        session: Session,
        order_id: int,
        payload: OrderUpdate,
    ) -> Order:
        """
        Partial update. Status moves along a simple state machine:

          pending   -> confirmed, canceled
          confirmed -> shipped, canceled
          shipped   -> (no change)
          canceled  -> (no change)

        Any invalid transition raises 400.
        """
        order = self._get_or_404(session, order_id)
        changes = payload.model_dump(exclude_unset=True)

        new_status = changes.pop("status", None)
        if new_status is not None and new_status != order.status:
            if new_status not in ALLOWED_TRANSITIONS.get(order.status, set()):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Invalid status transition: {order.status} -> {new_status}",
                )
            order.status = new_status

        for field, value in changes.items():
            if value is not None:
                setattr(order, field, value)

        self.order_repo.update_order(session, order)
        session.commit()
        session.refresh(order)
        return order

    def delete_order(self, session: Session, order_id: int) -> None:
        order = self._get_or_404(session, order_id)
        self.order_repo.delete_order(session, order)
        session.commit()

    # -------- Helpers --------

    def _get_or_404(self, session: Session, order_id: int) -> Order:
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return order

    def _build_order_with_details_dto(
        self,
        order: Order,
        details: list[OrderDetail],
    ) -> OrderWithDetailsRead:
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

        return OrderWithDetailsRead(
            id=order.id,
            branch_id=order.branch_id,
            order_date=order.order_date,
            name=order.name,
            description=order.description,
            status=order.status,
            details=detail_dtos,
            total=order_total(d.subtotal for d in detail_dtos),
        )
