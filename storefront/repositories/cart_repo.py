# storefront/repositories/cart_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from storefront.models.cart import Cart, CartItem, utcnow


class CartRepository:
    """
    Data access layer for carts and cart_items.

    Every mutating operation touches the parent cart's updated_at
    and commits. Not-found is signalled by returning None / False;
    HTTP mapping lives in the service.
    """

    # ---- Carts ----

    def get_by_session_id(self, session: Session, session_id: str) -> Cart | None:
        stmt = select(Cart).where(Cart.session_id == session_id)
        return session.exec(stmt).first()

    def get_by_id(self, session: Session, cart_id: int) -> Cart | None:
        return session.get(Cart, cart_id)

    def get_or_create_cart(
        self,
        session: Session,
        session_id: str,
        user_id: int | None = None,
    ) -> Cart:
        cart = self.get_by_session_id(session, session_id)
        if cart is not None:
            return cart

        now = utcnow()
        cart = Cart(
            session_id=session_id,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        session.add(cart)
        session.commit()
        session.refresh(cart)
        return cart

    def _touch(self, session: Session, cart_id: int) -> None:
        cart = session.get(Cart, cart_id)
        if cart is not None:
            cart.updated_at = utcnow()
            session.add(cart)

    # ---- Items ----

    def list_items(self, session: Session, cart_id: int) -> list[CartItem]:
        stmt = select(CartItem).where(CartItem.cart_id == cart_id).order_by(CartItem.id)
        return session.exec(stmt).all()

    def get_item(self, session: Session, cart_item_id: int) -> CartItem | None:
        return session.get(CartItem, cart_item_id)

    def find_item(
        self, session: Session, cart_id: int, product_id: int
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id, CartItem.product_id == product_id
        )
        return session.exec(stmt).first()

    def add_item(
        self,
        session: Session,
        cart_id: int,
        product_id: int,
        quantity: int,
        unit_price: float,
    ) -> CartItem:
        """
        Insert a line, or increment the existing line for this product.

        The stored unit_price of an existing line is kept (first write wins).

        Raises:
            ValueError: if the resulting quantity is not positive.
        """
        item = self.find_item(session, cart_id, product_id)

        if item is not None:
            new_qty = item.quantity + quantity
            if new_qty <= 0:
                raise ValueError("Quantity must be greater than 0")
            item.quantity = new_qty
        else:
            if quantity <= 0:
                raise ValueError("Quantity must be greater than 0")
            item = CartItem(
                cart_id=cart_id,
                product_id=product_id,
                quantity=quantity,
                unit_price=unit_price,
            )

        session.add(item)
        self._touch(session, cart_id)
        session.commit()
        session.refresh(item)
        return item

    def update_item_quantity(
        self, session: Session, cart_item_id: int, quantity: int
    ) -> CartItem | None:
        """
        Set a line's quantity. Zero is NOT a removal.

        Returns:
            The updated item, or None if it does not exist.

        Raises:
            ValueError: if quantity <= 0.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        item = self.get_item(session, cart_item_id)
        if item is None:
            return None

        item.quantity = quantity
        session.add(item)
        self._touch(session, item.cart_id)
        session.commit()
        session.refresh(item)
        return item

    def remove_item(self, session: Session, cart_item_id: int) -> bool:
        item = self.get_item(session, cart_item_id)
        if item is None:
            return False

        cart_id = item.cart_id
        session.delete(item)
        self._touch(session, cart_id)
        session.commit()
        return True

    def clear_cart(self, session: Session, cart_id: int) -> None:
        for row in self.list_items(session, cart_id):
            session.delete(row)
        self._touch(session, cart_id)
        session.commit()

    def get_cart_total(self, session: Session, cart_id: int) -> float:
        stmt = select(
            func.coalesce(func.sum(CartItem.quantity * CartItem.unit_price), 0)
        ).where(CartItem.cart_id == cart_id)
        value = session.exec(stmt).one()
        return float(value or 0)
