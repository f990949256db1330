# stockroom/data/models/product.py
from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, Numeric
from sqlalchemy.orm import relationship

from stockroom.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")

    #referencja po id, zmiana nazwy kategorii widoczna od razu we wszystkich produktach
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=0)
    price = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    category = relationship("CategoryModel", back_populates="products", lazy="joined")
