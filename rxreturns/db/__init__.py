"""Database package: engine, session factory, init_db(), get_session()."""

import threading
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker

from rxreturns.config import DATABASE_URL, SEED_DEMO_DATA
from rxreturns.db.base import Base

# Import all models so Base.metadata has all tables
from rxreturns.db.models import (  # noqa: F401
    CreditReport,
    Pharmacy,
    PriceObservation,
    ProductListItem,
    ReverseDistributor,
)

_init_lock = threading.Lock()
_engine = None
_SessionLocal: sessionmaker | None = None


def _get_engine():
    """Create engine with check_same_thread=False for use from request worker threads."""
    url = DATABASE_URL
    if url.startswith("sqlite"):
        if "?" in url:
            url += "&check_same_thread=False"
        else:
            url += "?check_same_thread=False"
    return create_engine(url, echo=False)


def init_db() -> None:
    """Create engine and tables; seed demo data from CSV when enabled and the database is empty."""
    global _engine, _SessionLocal
    with _init_lock:
        if _SessionLocal is not None:
            return
        _engine = _get_engine()
        Base.metadata.create_all(bind=_engine)
        if SEED_DEMO_DATA:
            with Session(bind=_engine) as session:
                has_rows = session.scalar(select(func.count(ReverseDistributor.id))) > 0
                if not has_rows:
                    from rxreturns.db.seed_data import seed_demo_data

                    seed_demo_data(session)
                    session.commit()
        _SessionLocal = sessionmaker(bind=_engine, autocommit=False, autoflush=False)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Context manager yielding a DB session. Calls init_db() on first use."""
    init_db()
    session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
