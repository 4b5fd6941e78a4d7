# storefront/routers/products.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.database import get_session
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductCreate, ProductRead, ProductUpdate
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """
    List catalog products.
    """
    return service.list_products(session, skip=skip, limit=limit)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    return service.get_product(session, product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    return service.create_product(session, payload)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Partial update (e.g. re-pricing). Existing order details keep
    the price they were created with.
    """
    return service.update_product(session, product_id, payload)
