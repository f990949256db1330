# stockroom/api/routers/reports.py
from typing import List
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from stockroom.data.database import get_db
from stockroom.domain.schemas import DashboardOut, LowStockProductOut
from stockroom.services.export_service import ExportService, XLSX_MEDIA_TYPE
from stockroom.services.product_service import ALL_CATEGORIES, ProductService
from stockroom.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


def _xlsx(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db)):
    return ReportService(db).dashboard()


@router.get("/low-stock", response_model=List[LowStockProductOut])
def low_stock(
    q: str = Query(""),
    category: str = Query(ALL_CATEGORIES),
    db: Session = Depends(get_db),
):
    return ReportService(db).low_stock_report(q, category)


@router.get("/low-stock/export")
def export_low_stock(
    q: str = Query(""),
    category: str = Query(ALL_CATEGORIES),
    db: Session = Depends(get_db),
):
    rows = ReportService(db).low_stock_report(q, category)
    return _xlsx(ExportService.low_stock_workbook(rows), "Low_Stock_Products.xlsx")


@router.get("/products/export")
def export_products(db: Session = Depends(get_db)):
    products = ProductService(db).list_products()
    return _xlsx(ExportService.products_workbook(products), "Products.xlsx")
