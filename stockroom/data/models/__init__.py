#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w Base.metadata

from stockroom.data.models.category import CategoryModel
from stockroom.data.models.product import ProductModel
from stockroom.data.models.cart_item import CartItemModel
from stockroom.data.models.withdrawal import WithdrawalModel, WithdrawalItemModel

__all__ = [
    "CategoryModel",
    "ProductModel",
    "CartItemModel",
    "WithdrawalModel",
    "WithdrawalItemModel",
]
