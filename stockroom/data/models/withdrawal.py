# stockroom/data/models/withdrawal.py
from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, Numeric
from sqlalchemy.orm import relationship

from stockroom.data.database import Base


class WithdrawalModel(Base):
    __tablename__ = "withdrawals"

    id = Column(Integer, primary_key=True, autoincrement=False)
    total_items = Column(Integer, nullable=False)

    user_id = Column(Integer, nullable=False)
    user_name = Column(String(100), nullable=False)
    user_section = Column(String(100), nullable=False)

    withdrawer_name = Column(String(100), nullable=False)
    withdrawer_section = Column(String(100), nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)

    items = relationship(
        "WithdrawalItemModel",
        back_populates="withdrawal",
        cascade="all, delete-orphan",
        order_by="WithdrawalItemModel.position",
        lazy="selectin",
    )


class WithdrawalItemModel(Base):
    """Snapshot produktu z chwili zatwierdzenia, bez FK do products."""

    __tablename__ = "withdrawal_items"

    id = Column(Integer, primary_key=True)
    withdrawal_id = Column(Integer, ForeignKey("withdrawals.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)

    product_id = Column(Integer, nullable=False)
    product_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    withdrawal = relationship("WithdrawalModel", back_populates="items")
