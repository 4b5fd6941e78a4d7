# storefront/repositories/product_repo.py
from sqlmodel import Session, select

from storefront.models.product import Product


class ProductRepository:
    """
    Data access layer for the product catalog.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        return session.get(Product, product_id)

    def get_many(self, session: Session, product_ids: list[int]) -> dict[int, Product]:
        """
        Load several products in one query, keyed by id.
        Missing ids are simply absent from the result.
        """
        if not product_ids:
            return {}
        stmt = select(Product).where(Product.id.in_(set(product_ids)))
        return {p.id: p for p in session.exec(stmt).all()}

    def list(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        stmt = select(Product).order_by(Product.id).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product
