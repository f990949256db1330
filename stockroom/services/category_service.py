# stockroom/services/category_service.py
from typing import Dict, Any, List
from sqlalchemy.orm import Session

from stockroom.data.models.category import CategoryModel
from stockroom.domain.errors import ConflictError, NotFoundError, ReferentialError, ValidationError
from stockroom.repos.category_repo import CategoryRepo
from stockroom.utils.logging import get_logger

logger = get_logger(__name__)


def serialize_category(category: CategoryModel) -> Dict[str, Any]:
    return {"id": category.id, "name": category.name}


class CategoryService:
    """
    Kategorie produktow.
    Nazwa unikalna bez wielkosci liter, usuniecie zablokowane gdy uzywa jej jakis produkt.
    """

    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)

    #query
    def list_categories(self) -> List[Dict[str, Any]]:
        return [serialize_category(c) for c in self.repo.list_categories()]

    def get_category(self, category_id: int) -> Dict[str, Any]:
        return serialize_category(self._require(category_id))

    #commands
    def add_category(self, name: str) -> Dict[str, Any]:
        name = self._clean_name(name)

        if self.repo.find_by_name(name):
            logger.warning(f"Category '{name}' already exists")
            raise ConflictError(f"A category named '{name}' already exists")

        category = self.repo.add_category(CategoryModel(id=self.repo.next_id(), name=name))
        self.repo.commit()

        logger.info(f"Created category {category.id} '{category.name}'")
        return serialize_category(category)

    def rename_category(self, category_id: int, name: str) -> Dict[str, Any]:
        category = self._require(category_id)
        name = self._clean_name(name)

        if self.repo.find_by_name(name, exclude_id=category_id):
            logger.warning(f"Cannot rename category {category_id}: '{name}' already taken")
            raise ConflictError(f"Another category named '{name}' already exists")

        category.name = name
        self.repo.commit()

        logger.info(f"Renamed category {category_id} to '{name}'")
        return serialize_category(category)

    def remove_category(self, category_id: int) -> None:
        category = self._require(category_id)

        in_use = self.repo.count_products(category_id)
        if in_use > 0:
            logger.warning(f"Category {category_id} is referenced by {in_use} products")
            raise ReferentialError(
                f"Category '{category.name}' is in use by {in_use} products",
                count=in_use,
            )

        self.repo.delete_category(category)
        self.repo.commit()

        logger.info(f"Deleted category {category_id}")

    def _require(self, category_id: int) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name must not be blank")
        return name
