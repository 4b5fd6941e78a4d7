# storefront/services/product_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductCreate, ProductUpdate


class ProductService:
    """
    Catalog maintenance.

    Checkout reads prices through ProductRepository directly; this service
    only seeds and re-prices the catalog.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        return self.repo.list(session, skip=skip, limit=limit)

    def get_product(self, session: Session, product_id: int) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Product {product_id} not found",
            )
        return product

    def create_product(self, session: Session, payload: ProductCreate) -> Product:
        product = Product(**payload.model_dump())
        return self.repo.create(session, product)

    def update_product(
        self,
        session: Session,
        product_id: int,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update. Changing price or discount never touches
        existing cart lines or order details.
        """
        product = self.get_product(session, product_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(product, field, value)

        return self.repo.update(session, product)
