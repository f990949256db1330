# stockroom/api/routers/categories.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.api.errors import to_http
from stockroom.data.database import get_db
from stockroom.domain.errors import InventoryError
from stockroom.domain.schemas import CategoryIn, CategoryOut
from stockroom.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


def get_service(db: Session):
    return CategoryService(db)


@router.get("/", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return get_service(db).list_categories()


@router.post("/", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_category(payload.name)
    except InventoryError as e:
        raise to_http(e)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_category(category_id)
    except InventoryError as e:
        raise to_http(e)


@router.put("/{category_id}", response_model=CategoryOut)
def rename_category(category_id: int, payload: CategoryIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.rename_category(category_id, payload.name)
    except InventoryError as e:
        raise to_http(e)


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.remove_category(category_id)
    except InventoryError as e:
        raise to_http(e)
