# stockroom/data/seed.py
from datetime import datetime, timezone
from decimal import Decimal

from stockroom.data.database import SessionLocal
from stockroom.data.models.category import CategoryModel
from stockroom.data.models.product import ProductModel

SAMPLE_CATEGORIES = ["Tools", "Office supplies", "Cleaning", "Electrical"]

#(nazwa, opis, kategoria, stan, minimum, cena)
SAMPLE_PRODUCTS = [
    ("Hammer", "Steel claw hammer, 16 oz", "Tools", 15, 5, "12.50"),
    ("Screwdriver set", "Six-piece precision set", "Tools", 4, 5, "18.90"),
    ("A4 paper", "Ream of 500 sheets", "Office supplies", 40, 10, "4.75"),
    ("Ballpoint pens", "Box of 50, blue ink", "Office supplies", 8, 8, "6.20"),
    ("Floor cleaner", "5 l concentrate", "Cleaning", 2, 4, "9.99"),
    ("Extension cord", "5 m, 4 sockets", "Electrical", 12, 3, "14.30"),
]


def seed(session_factory=SessionLocal):
    db = session_factory()
    try:
        # only seed if empty
        if db.query(CategoryModel).first():
            return

        categories = {}
        for idx, name in enumerate(SAMPLE_CATEGORIES, start=1):
            categories[name] = CategoryModel(id=idx, name=name)
            db.add(categories[name])

        now = datetime.now(timezone.utc)
        for idx, (name, description, category, stock, min_stock, price) in enumerate(SAMPLE_PRODUCTS, start=1):
            db.add(
                ProductModel(
                    id=idx,
                    name=name,
                    description=description,
                    category=categories[category],
                    stock=stock,
                    min_stock=min_stock,
                    price=Decimal(price),
                    created_at=now,
                    updated_at=now,
                )
            )
        db.commit()
    finally:
        db.close()
