# stockroom/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.api.errors import to_http
from stockroom.data.database import get_db
from stockroom.domain.errors import InventoryError
from stockroom.domain.schemas import CartItemIn, CartQuantityIn, CartOut
from stockroom.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("/", response_model=CartOut)
def get_cart(db: Session = Depends(get_db)):
    return get_service(db).get_cart()


@router.post("/items", response_model=CartOut)
def add_item(payload: CartItemIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_item(payload.product_id, payload.quantity)
    except InventoryError as e:
        raise to_http(e)


@router.put("/items/{product_id}", response_model=CartOut)
def set_quantity(product_id: int, payload: CartQuantityIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.set_quantity(product_id, payload.quantity)
    except InventoryError as e:
        raise to_http(e)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.remove_item(product_id)
    except InventoryError as e:
        raise to_http(e)


@router.delete("/", response_model=CartOut)
def clear_cart(db: Session = Depends(get_db)):
    return get_service(db).clear()
