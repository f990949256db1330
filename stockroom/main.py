# stockroom/main.py
from fastapi import FastAPI
from stockroom.data.database import Base, engine
from stockroom.data.seed import seed
from stockroom.api.routers import health, categories, products, cart, withdrawals, session, reports
from stockroom.utils.settings import SEED_SAMPLE_DATA
from stockroom.utils.logging import get_logger
import uvicorn

logger = get_logger(__name__)

# import wszystkich modeli przed create_all
from stockroom.data.models import (  # noqa: E402,F401
    CategoryModel,
    ProductModel,
    CartItemModel,
    WithdrawalModel,
    WithdrawalItemModel,
)

logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")

try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
except Exception as e:
    logger.error(f"Failed to create tables: {e}")
    raise

if SEED_SAMPLE_DATA:
    seed()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Stockroom",
        version="1.0.0",
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(session.router)
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(withdrawals.router)
    app.include_router(reports.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
