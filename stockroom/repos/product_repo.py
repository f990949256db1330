# stockroom/repos/product_repo.py
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from stockroom.data.models.category import CategoryModel
from stockroom.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self) -> list[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids) -> dict[int, ProductModel]:
        ids = list(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(select(ProductModel).where(ProductModel.id.in_(ids))).scalars()
        return {p.id: p for p in rows}

    def search(self, query: str) -> list[ProductModel]:
        stmt = (
            select(ProductModel)
            .where(
                or_(
                    ProductModel.name.icontains(query, autoescape=True),
                    ProductModel.description.icontains(query, autoescape=True),
                )
            )
            .order_by(ProductModel.id)
        )
        return list(self.db.execute(stmt).scalars())

    def filter_by_category_name(self, name: str) -> list[ProductModel]:
        stmt = (
            select(ProductModel)
            .join(CategoryModel, ProductModel.category_id == CategoryModel.id)
            .where(CategoryModel.name == name)
            .order_by(ProductModel.id)
        )
        return list(self.db.execute(stmt).scalars())

    def low_stock(self) -> list[ProductModel]:
        #na progu tez liczy sie jako niski stan
        stmt = select(ProductModel).where(ProductModel.stock <= ProductModel.min_stock).order_by(ProductModel.id)
        return list(self.db.execute(stmt).scalars())

    def recent(self, limit: int) -> list[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc(), ProductModel.id.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars())

    def next_id(self) -> int:
        return self.db.execute(select(func.coalesce(func.max(ProductModel.id), 0))).scalar_one() + 1

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.flush()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
