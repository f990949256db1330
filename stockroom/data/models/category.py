from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from stockroom.data.database import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)

    products = relationship("ProductModel", back_populates="category")
