# stockroom/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal
from decimal import Decimal
from datetime import datetime


class CategoryIn(BaseModel):
    """Schema dla tworzenia i zmiany nazwy kategorii."""

    name: str = Field(..., min_length=1, max_length=100, description="Nazwa kategorii")


class CategoryOut(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    """Schema dla tworzenia produktu."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category_id: int = Field(..., gt=0, description="ID kategorii (musi istniec)")
    stock: int = Field(0, ge=0)
    min_stock: int = Field(0, ge=0)
    price: Decimal = Field(..., gt=0, decimal_places=2)


class ProductUpdate(BaseModel):
    """Schema dla czesciowej aktualizacji produktu, pola pominiete zostaja bez zmian."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    category_id: int | None = Field(None, gt=0)
    stock: int | None = Field(None, ge=0)
    min_stock: int | None = Field(None, ge=0)
    price: Decimal | None = Field(None, gt=0, decimal_places=2)


class StockAdjustIn(BaseModel):
    delta: int = Field(..., description="Zmiana stanu, ujemna zdejmuje z magazynu")


class ProductOut(BaseModel):
    id: int
    name: str
    description: str
    category_id: int
    category: str
    stock: int
    min_stock: int
    price: Decimal
    created_at: datetime
    updated_at: datetime


class LowStockProductOut(ProductOut):
    deficit: int


class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(..., description="Ilość produktu")


class CartQuantityIn(BaseModel):
    quantity: int = Field(..., description="Nowa ilosc, <= 0 usuwa linie")


class CartLineOut(BaseModel):
    product_id: int
    name: str
    quantity: int
    stock: int


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    items: List[CartLineOut]
    total_items: int


class WithdrawalCreate(BaseModel):
    """Schema dla zatwierdzenia wydania z magazynu."""

    withdrawer_name: str = Field(..., max_length=100)
    withdrawer_section: str = Field(..., max_length=100)
    notes: str | None = None


class WithdrawalItemOut(BaseModel):
    product_id: int
    product_name: str
    description: str
    category: str
    price: Decimal
    quantity: int


class WithdrawalOut(BaseModel):
    """Schema dla wydania (response)."""

    id: int
    items: List[WithdrawalItemOut]
    total_items: int
    user_id: int
    user_name: str
    user_section: str
    withdrawer_name: str
    withdrawer_section: str
    notes: str | None = None
    created_at: datetime


class SessionUser(BaseModel):
    """Zalogowany uzytkownik, trzymany w redis pod kluczem "user"."""

    id: int
    name: str
    email: str
    employee_code: str
    role: Literal["admin", "user"]
    section: str


class LoginIn(BaseModel):
    employee_code: str
    password: str


class ChangePasswordIn(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str


class TopWithdrawnOut(BaseModel):
    product_id: int
    name: str
    quantity: int


class CategoryCountOut(BaseModel):
    category: str
    count: int


class DashboardOut(BaseModel):
    total_products: int
    total_categories: int
    low_stock_count: int
    total_withdrawals: int
    top_withdrawn_products: List[TopWithdrawnOut]
    top_categories: List[CategoryCountOut]
    recent_products: List[ProductOut]
    recent_withdrawals: List[WithdrawalOut]
