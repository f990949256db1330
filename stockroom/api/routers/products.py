# stockroom/api/routers/products.py
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stockroom.api.errors import to_http
from stockroom.data.database import get_db
from stockroom.domain.errors import InventoryError
from stockroom.domain.schemas import ProductCreate, ProductUpdate, ProductOut, StockAdjustIn
from stockroom.services.product_service import ALL_CATEGORIES, ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("/", response_model=List[ProductOut])
def list_products(
    q: str | None = Query(None, description="Szukaj w nazwie i opisie"),
    category: str = Query(ALL_CATEGORIES, description="Nazwa kategorii albo 'all'"),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    products = svc.search(q)
    if category != ALL_CATEGORIES:
        in_category = {p["id"] for p in svc.filter_by_category(category)}
        products = [p for p in products if p["id"] in in_category]
    return products


@router.get("/low-stock", response_model=List[ProductOut])
def low_stock(db: Session = Depends(get_db)):
    return get_service(db).low_stock()


@router.post("/", response_model=ProductOut, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_product(payload.model_dump())
    except InventoryError as e:
        raise to_http(e)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_product(product_id)
    except InventoryError as e:
        raise to_http(e)


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_product(product_id, payload.model_dump(exclude_unset=True))
    except InventoryError as e:
        raise to_http(e)


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.remove_product(product_id)
    except InventoryError as e:
        raise to_http(e)


@router.post("/{product_id}/stock", response_model=ProductOut)
def adjust_stock(product_id: int, payload: StockAdjustIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.adjust_stock(product_id, payload.delta)
    except InventoryError as e:
        raise to_http(e)
