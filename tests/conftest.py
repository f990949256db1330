"""
Pytest fixtures for stockroom tests.

Every test gets its own in-memory database, a fake redis and eager celery.
"""

import os

os.environ.setdefault("SEED_SAMPLE_DATA", "0")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "1")

from decimal import Decimal

import fakeredis
import pytest
from sqlalchemy.orm import sessionmaker

from stockroom.celery_worker import celery_app
from stockroom.data.database import Base, build_engine
from stockroom.data import models  # noqa: F401
from stockroom.services.cart_service import CartService
from stockroom.services.category_service import CategoryService
from stockroom.services.lock_service import LockService
from stockroom.services.product_service import ProductService
from stockroom.services.report_service import ReportService
from stockroom.services.session_service import SessionService
from stockroom.services.withdrawal_service import WithdrawalService


class RecordingNotifier:
    """Zbiera powiadomienia zamiast wysylac je do celery."""

    def __init__(self):
        self.stock = []
        self.withdrawals = []

    def send_stock_notification(self, product_id, name, delta, stock, min_stock):
        self.stock.append((product_id, delta, stock, stock <= min_stock))

    def send_withdrawal_notification(self, withdrawal_id, total_items, withdrawer_name):
        self.withdrawals.append((withdrawal_id, total_items, withdrawer_name))


@pytest.fixture(scope="session", autouse=True)
def eager_celery():
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_eager_propagates = True
    yield


@pytest.fixture
def engine():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def categories(db):
    return CategoryService(db)


@pytest.fixture
def products(db, notifier):
    return ProductService(db, notification_service=notifier)


@pytest.fixture
def cart(db):
    return CartService(db)


@pytest.fixture
def session_service(redis_client):
    return SessionService(redis_client)


@pytest.fixture
def lock_service(redis_client):
    return LockService(client=redis_client)


@pytest.fixture
def withdrawals(db, session_service, lock_service, notifier):
    return WithdrawalService(
        db=db,
        session_service=session_service,
        lock_service=lock_service,
        notification_service=notifier,
    )


@pytest.fixture
def reports(db):
    return ReportService(db)


@pytest.fixture
def logged_in(session_service):
    return session_service.login("123456a", "password")


@pytest.fixture
def tools(categories):
    return categories.add_category("Tools")


@pytest.fixture
def widget(products, tools):
    """Widget: stock 10, min 2, w kategorii Tools."""
    return products.add_product(
        {
            "name": "Widget",
            "description": "Standard widget",
            "category_id": tools["id"],
            "stock": 10,
            "min_stock": 2,
            "price": Decimal("3.50"),
        }
    )


@pytest.fixture
def gadget(products, tools):
    return products.add_product(
        {
            "name": "Gadget",
            "description": "Pocket gadget",
            "category_id": tools["id"],
            "stock": 4,
            "min_stock": 1,
            "price": Decimal("8.00"),
        }
    )
