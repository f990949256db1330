# stockroom/services/product_service.py
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Dict, Any, List
from sqlalchemy.orm import Session

from stockroom.data.models.product import ProductModel
from stockroom.domain.errors import ConflictError, NotFoundError, ValidationError
from stockroom.repos.cart_repo import CartRepo
from stockroom.repos.category_repo import CategoryRepo
from stockroom.repos.product_repo import ProductRepo
from stockroom.services.notification_service import NotificationService
from stockroom.utils.logging import get_logger

logger = get_logger(__name__)

ALL_CATEGORIES = "all"

_EDITABLE_FIELDS = ("name", "description", "category_id", "stock", "min_stock", "price")


def serialize_product(product: ProductModel) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "category_id": product.category_id,
        "category": product.category.name if product.category else "",
        "stock": product.stock,
        "min_stock": product.min_stock,
        "price": product.price,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def apply_stock_delta(product: ProductModel, delta: int) -> None:
    """
    Jedyne miejsce gdzie zmienia sie stan magazynowy.
    Nie commituje, wolajacy decyduje o transakcji.
    """
    if product.stock + delta < 0:
        raise ConflictError(
            f"Insufficient stock for '{product.name}': {product.stock} available, {-delta} requested"
        )
    product.stock = product.stock + delta
    product.updated_at = datetime.now(timezone.utc)


class ProductService:
    """
    Produkty i stan magazynowy.
    Commands (add, update, remove, adjust_stock) modyfikuja stan,
    query (get, list, search, filter, low_stock) tylko odczyt.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = ProductRepo(db)
        self.category_repo = CategoryRepo(db)
        self.cart_repo = CartRepo(db)
        self.notification_service = notification_service or NotificationService()

    #query - odczyt
    def get_product(self, product_id: int) -> Dict[str, Any]:
        return serialize_product(self._require(product_id))

    def list_products(self) -> List[Dict[str, Any]]:
        return [serialize_product(p) for p in self.repo.list_products()]

    def search(self, query: str | None) -> List[Dict[str, Any]]:
        #pusty query zwraca wszystko, bez limitu
        if not query or not query.strip():
            return self.list_products()
        return [serialize_product(p) for p in self.repo.search(query)]

    def filter_by_category(self, category: str) -> List[Dict[str, Any]]:
        if category == ALL_CATEGORIES:
            return self.list_products()
        return [serialize_product(p) for p in self.repo.filter_by_category_name(category)]

    def low_stock(self) -> List[Dict[str, Any]]:
        return [serialize_product(p) for p in self.repo.low_stock()]

    #commands
    def add_product(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        data = self._validate({
            "description": "",
            "stock": 0,
            "min_stock": 0,
            **{k: v for k, v in fields.items() if k in _EDITABLE_FIELDS},
        }, required=("name", "category_id", "price"))

        now = datetime.now(timezone.utc)
        product = self.repo.add_product(
            ProductModel(
                id=self.repo.next_id(),
                created_at=now,
                updated_at=now,
                **data,
            )
        )
        self.repo.commit()

        logger.info(f"Created product {product.id} '{product.name}' with stock {product.stock}")
        return serialize_product(product)

    def update_product(self, product_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        product = self._require(product_id)
        data = self._validate({k: v for k, v in fields.items() if k in _EDITABLE_FIELDS and v is not None})

        for key, value in data.items():
            setattr(product, key, value)
        product.updated_at = datetime.now(timezone.utc)
        self.repo.commit()

        logger.info(f"Updated product {product_id}: {sorted(data)}")
        return serialize_product(product)

    def remove_product(self, product_id: int) -> None:
        product = self._require(product_id)

        #linia koszyka nie moze wskazywac na nieistniejacy produkt, wydania maja wlasny snapshot
        dropped = self.cart_repo.delete_cart_item(product_id)
        self.repo.delete_product(product)
        self.repo.commit()

        if dropped:
            logger.info(f"Dropped cart line for deleted product {product_id}")
        logger.info(f"Deleted product {product_id}")

    def adjust_stock(self, product_id: int, delta: int) -> Dict[str, Any]:
        product = self._require(product_id)

        if delta == 0:
            raise ValidationError("Stock change must not be zero")

        try:
            apply_stock_delta(product, delta)
        except ConflictError:
            self.repo.rollback()
            logger.warning(f"Rejected stock change {delta:+d} for product {product_id} (stock {product.stock})")
            raise

        self.repo.commit()
        logger.info(f"Stock of product {product_id} changed by {delta:+d}, now {product.stock}")

        self.notification_service.send_stock_notification(
            product.id, product.name, delta, product.stock, product.min_stock
        )
        return serialize_product(product)

    def _require(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def _validate(self, data: Dict[str, Any], required=()) -> Dict[str, Any]:
        for key in required:
            if data.get(key) is None:
                raise ValidationError(f"Field '{key}' is required")

        if "name" in data:
            data["name"] = str(data["name"]).strip()
            if not data["name"]:
                raise ValidationError("Product name must not be blank")

        if "description" in data:
            data["description"] = data["description"] or ""

        for key in ("stock", "min_stock"):
            if key in data and int(data[key]) < 0:
                raise ValidationError(f"Field '{key}' must not be negative")

        if "price" in data:
            try:
                data["price"] = Decimal(str(data["price"]))
            except InvalidOperation:
                raise ValidationError("Price must be a number")
            if not data["price"].is_finite():
                raise ValidationError("Price must be a finite number")
            if data["price"] <= 0:
                raise ValidationError("Price must be greater than 0")

        if "category_id" in data and not self.category_repo.get_category(data["category_id"]):
            raise ValidationError(f"Category {data['category_id']} does not exist")

        return data
