# stockroom/data/database.py
import threading
from contextlib import contextmanager, nullcontext

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from stockroom.utils.settings import DATABASE_URL


def _casefold(value):
    if isinstance(value, str):
        return value.casefold()
    return value


def build_engine(url: str = DATABASE_URL):
    if url.startswith("sqlite"):
        #jedno polaczenie dzielone miedzy watki, inaczej kazdy watek widzi pusta baze w pamieci
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        #wbudowane lower() w sqlite zna tylko ASCII, "Í" zostaje "Í"
        @event.listens_for(engine, "connect")
        def _register_unicode_lower(dbapi_conn, connection_record):
            dbapi_conn.create_function("lower", 1, _casefold, deterministic=True)

        return engine
    return create_engine(url)


def shares_connection(engine) -> bool:
    return isinstance(engine.pool, StaticPool)


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

#rollback jednej sesji na wspolnym polaczeniu kasuje niezacommitowane zmiany drugiej
_shared_connection_lock = threading.Lock()


@contextmanager
def session_scope(session_factory=SessionLocal):
    """
    Sesja na czas jednej operacji.
    Przy wspoldzielonym polaczeniu (StaticPool) sesje ida po kolei.
    """
    guard = _shared_connection_lock if shares_connection(session_factory.kw["bind"]) else nullcontext()
    with guard:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()


def get_db():
    """Dependency - sesja bazy na czas jednego requestu."""
    with session_scope() as db:
        yield db
