# stockroom/repos/category_repo.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stockroom.data.models.category import CategoryModel
from stockroom.data.models.product import ProductModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.id)).scalars())

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def find_by_name(self, name: str, exclude_id: int | None = None) -> CategoryModel | None:
        #porownanie bez wielkosci liter
        stmt = select(CategoryModel).where(func.lower(CategoryModel.name) == name.casefold())
        if exclude_id is not None:
            stmt = stmt.where(CategoryModel.id != exclude_id)
        return self.db.execute(stmt).scalars().first()

    def next_id(self) -> int:
        return self.db.execute(select(func.coalesce(func.max(CategoryModel.id), 0))).scalar_one() + 1

    def count_products(self, category_id: int) -> int:
        return self.db.execute(
            select(func.count(ProductModel.id)).where(ProductModel.category_id == category_id)
        ).scalar_one()

    def add_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.flush()
        return category

    def delete_category(self, category: CategoryModel) -> None:
        self.db.delete(category)
        self.db.flush()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
