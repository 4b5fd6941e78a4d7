# storefront/repositories/order_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from storefront.models.order import Order, OrderDetail


class OrderRepository:
    """
    Data access layer for orders and order_details.

    NOTE:
      - No commits here; order creation is a multi-step transaction.
        The service is responsible for calling session.commit().
    """

    # ---- Orders ----

    def list_all(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = (
            select(Order)
            .order_by(Order.order_date.desc(), Order.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def count(self, session: Session) -> int:
        value = session.exec(select(func.count()).select_from(Order)).one()
        return int(value or 0)

    def get_by_id(self, session: Session, order_id: int) -> Order | None:
        return session.get(Order, order_id)

    def create_order(self, session: Session, order: Order) -> Order:
        """
        Insert an Order without committing, but ensure id is populated.
        """
        session.add(order)
        session.flush()  # Assign PK
        session.refresh(order)
        return order

    def update_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        session.refresh(order)
        return order

    def delete_order(self, session: Session, order: Order) -> None:
        for detail in self.list_details_for_order(session, order.id):
            session.delete(detail)
        session.delete(order)
        session.flush()

    # ---- Order details ----

    def list_details_for_order(
        self,
        session: Session,
        order_id: int,
    ) -> list[OrderDetail]:
        stmt = (
            select(OrderDetail)
            .where(OrderDetail.order_id == order_id)
            .order_by(OrderDetail.id)
        )
        return session.exec(stmt).all()

    def count_details(self, session: Session) -> int:
        value = session.exec(select(func.count()).select_from(OrderDetail)).one()
        return int(value or 0)

    def create_detail(self, session: Session, detail: OrderDetail) -> OrderDetail:
        """
        Insert one detail row without committing.
        """
        session.add(detail)
        session.flush()
        session.refresh(detail)
        return detail
