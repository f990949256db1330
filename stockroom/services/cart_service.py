# stockroom/services/cart_service.py
from typing import Dict, Any
from sqlalchemy.orm import Session

from stockroom.data.models.cart_item import CartItemModel
from stockroom.domain.errors import ConflictError, NotFoundError, ValidationError
from stockroom.repos.cart_repo import CartRepo
from stockroom.repos.product_repo import ProductRepo
from stockroom.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Koszyk wydania (szkic przed zatwierdzeniem).
    Kazda zmiana sprawdzana wzgledem aktualnego stanu produktu,
    bo stan mogl sie zmienic od momentu dodania linii.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.product_repo = ProductRepo(db)

    #query - odczyt
    def get_cart(self) -> Dict[str, Any]:
        items = self.repo.get_cart_items()
        products = self.product_repo.get_products(i.product_id for i in items)

        lines = []
        for item in items:
            product = products.get(item.product_id)
            lines.append(
                {
                    "product_id": item.product_id,
                    "name": product.name if product else "",
                    "quantity": item.quantity,
                    "stock": product.stock if product else 0,
                }
            )

        return {
            "items": lines,
            "total_items": sum(i.quantity for i in items),
        }

    def total_items(self) -> int:
        #liczone przy odczycie, nigdzie nie trzymane
        return sum(i.quantity for i in self.repo.get_cart_items())

    #commands
    def add_item(self, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        product = self.product_repo.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")

        if quantity > product.stock:
            logger.warning(f"Cart add rejected: {quantity} x product {product_id}, stock {product.stock}")
            raise ConflictError(f"Only {product.stock} units of '{product.name}' available")

        existing_item = self.repo.get_cart_item(product_id)

        if existing_item:
            new_quantity = existing_item.quantity + quantity
            if new_quantity > product.stock:
                #linia zostaje z poprzednia iloscia
                logger.warning(
                    f"Cart merge rejected: {existing_item.quantity} + {quantity} of product {product_id}, "
                    f"stock {product.stock}"
                )
                raise ConflictError(f"Cannot exceed available stock ({product.stock}) of '{product.name}'")

            logger.info(
                f"Produkt {product_id} juz jest w koszyku, zwiekszam ilosc "
                f"z {existing_item.quantity} do {new_quantity}"
            )
            existing_item.quantity = new_quantity
        else:
            logger.info(f"Dodaje produkt {product_id} do koszyka, ilosc {quantity}")
            self.repo.add_cart_item(CartItemModel(product_id=product_id, quantity=quantity))

        self.repo.commit()
        return self.get_cart()

    def remove_item(self, product_id: int) -> Dict[str, Any]:
        removed = self.repo.delete_cart_item(product_id)
        if not removed:
            self.repo.rollback()
            raise NotFoundError(f"Product {product_id} is not in the cart")

        self.repo.commit()
        logger.info(f"Usunieto produkt {product_id} z koszyka")
        return self.get_cart()

    def set_quantity(self, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            return self.remove_item(product_id)

        product = self.product_repo.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")

        item = self.repo.get_cart_item(product_id)
        if not item:
            raise NotFoundError(f"Product {product_id} is not in the cart")

        if quantity > product.stock:
            logger.warning(f"Cart update rejected: {quantity} x product {product_id}, stock {product.stock}")
            raise ConflictError(f"Only {product.stock} units of '{product.name}' available")

        item.quantity = quantity
        self.repo.commit()

        logger.info(f"Ilosc produktu {product_id} w koszyku ustawiona na {quantity}")
        return self.get_cart()

    def clear(self) -> Dict[str, Any]:
        removed = self.repo.clear()
        self.repo.commit()
        logger.info(f"Koszyk wyczyszczony ({removed} linii)")
        return self.get_cart()
