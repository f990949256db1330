# stockroom/services/export_service.py
import io
from typing import Dict, Any, List, Sequence

from openpyxl import Workbook

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

PRODUCT_COLUMNS = (
    ("Name", "name"),
    ("Description", "description"),
    ("Category", "category"),
    ("Stock", "stock"),
    ("Minimum stock", "min_stock"),
    ("Price", "price"),
)

LOW_STOCK_COLUMNS = (
    ("Name", "name"),
    ("Description", "description"),
    ("Category", "category"),
    ("Current stock", "stock"),
    ("Minimum stock", "min_stock"),
    ("Deficit", "deficit"),
    ("Price", "price"),
)

WITHDRAWAL_HEADERS = (
    "Product",
    "Category",
    "Quantity",
    "Withdrawal date",
    "Withdrawal time",
    "Registered by",
    "Registering section",
    "Withdrawn by",
    "Withdrawer section",
    "Notes",
)


def _to_bytes(title: str, headers: Sequence[str], rows: List[Sequence[Any]]) -> bytes:
    wb = Workbook()
    sheet = wb.active
    #excel ucina tytul arkusza do 31 znakow
    sheet.title = title[:31]
    sheet.append(list(headers))
    for row in rows:
        sheet.append(list(row))

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


class ExportService:
    """
    Eksport do arkusza. Czysta serializacja juz zwalidowanych danych,
    nic nie zapisuje poza zwracanymi bajtami.
    """

    @staticmethod
    def products_workbook(products: List[Dict[str, Any]]) -> bytes:
        return _to_bytes(
            "Products",
            [h for h, _ in PRODUCT_COLUMNS],
            [[p[key] for _, key in PRODUCT_COLUMNS] for p in products],
        )

    @staticmethod
    def low_stock_workbook(rows: List[Dict[str, Any]]) -> bytes:
        return _to_bytes(
            "Low stock",
            [h for h, _ in LOW_STOCK_COLUMNS],
            [[r[key] for _, key in LOW_STOCK_COLUMNS] for r in rows],
        )

    @staticmethod
    def withdrawal_workbook(withdrawal: Dict[str, Any]) -> bytes:
        created = withdrawal["created_at"]
        rows = [
            [
                item["product_name"],
                item["category"],
                item["quantity"],
                created.strftime("%Y-%m-%d"),
                created.strftime("%H:%M:%S"),
                withdrawal["user_name"],
                withdrawal["user_section"],
                withdrawal["withdrawer_name"],
                withdrawal["withdrawer_section"],
                withdrawal["notes"] or "N/A",
            ]
            for item in withdrawal["items"]
        ]
        return _to_bytes(f"Withdrawal {withdrawal['id']}", WITHDRAWAL_HEADERS, rows)

    @staticmethod
    def withdrawal_filename(withdrawal: Dict[str, Any]) -> str:
        return f"Withdrawal-{withdrawal['id']}-{withdrawal['created_at'].strftime('%Y-%m-%d')}.xlsx"
