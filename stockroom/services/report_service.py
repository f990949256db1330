# stockroom/services/report_service.py
from collections import Counter
from typing import Dict, Any, List
from sqlalchemy.orm import Session

from stockroom.repos.product_repo import ProductRepo
from stockroom.repos.withdrawal_repo import WithdrawalRepo
from stockroom.services.product_service import ALL_CATEGORIES, serialize_product
from stockroom.services.withdrawal_service import serialize_withdrawal

TOP_LIMIT = 4
RECENT_LIMIT = 5
UNKNOWN_PRODUCT = "Unknown product"


class ReportService:
    """Widoki tylko do odczytu: dashboard i lista niskich stanow."""

    def __init__(self, db: Session):
        self.product_repo = ProductRepo(db)
        self.withdrawal_repo = WithdrawalRepo(db)

    def dashboard(self) -> Dict[str, Any]:
        products = self.product_repo.list_products()
        by_id = {p.id: p for p in products}

        category_counts = Counter(p.category.name for p in products)

        top_withdrawn = [
            {
                "product_id": product_id,
                "name": by_id[product_id].name if product_id in by_id else UNKNOWN_PRODUCT,
                "quantity": quantity,
            }
            for product_id, quantity in self.withdrawal_repo.withdrawn_quantities()[:TOP_LIMIT]
        ]

        return {
            "total_products": len(products),
            #kategorie faktycznie uzywane przez produkty
            "total_categories": len(category_counts),
            "low_stock_count": sum(1 for p in products if p.stock <= p.min_stock),
            "total_withdrawals": self.withdrawal_repo.count(),
            "top_withdrawn_products": top_withdrawn,
            "top_categories": [
                {"category": name, "count": count}
                for name, count in category_counts.most_common(TOP_LIMIT)
            ],
            "recent_products": [serialize_product(p) for p in self.product_repo.recent(RECENT_LIMIT)],
            "recent_withdrawals": [
                serialize_withdrawal(w) for w in self.withdrawal_repo.list_withdrawals(limit=RECENT_LIMIT)
            ],
        }

    def low_stock_report(self, query: str = "", category: str = ALL_CATEGORIES) -> List[Dict[str, Any]]:
        needle = (query or "").casefold()
        rows = []
        for product in self.product_repo.low_stock():
            matches_search = needle in product.name.casefold() or needle in product.description.casefold()
            matches_category = category == ALL_CATEGORIES or product.category.name == category
            if matches_search and matches_category:
                row = serialize_product(product)
                row["deficit"] = product.min_stock - product.stock
                rows.append(row)
        return rows
