from sqlalchemy import Column, Integer, UniqueConstraint

from stockroom.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    #id rosnie z kazdym dodaniem, kolejnosc linii = kolejnosc id
    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (UniqueConstraint("product_id", name="u_cart_product"),)
