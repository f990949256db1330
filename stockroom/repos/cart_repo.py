# stockroom/repos/cart_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from stockroom.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self) -> list[CartItemModel]:
        return list(self.db.execute(select(CartItemModel).order_by(CartItemModel.id)).scalars())

    def get_cart_item(self, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(CartItemModel.product_id == product_id)
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, product_id: int) -> int:
        res = self.db.execute(delete(CartItemModel).where(CartItemModel.product_id == product_id))
        return res.rowcount

    def clear(self) -> int:
        res = self.db.execute(delete(CartItemModel))
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
