# lockerhub/database.py
"""
Store: database engine, session factory, and the single mutex that makes
every compound engine operation atomic.
Uses SQLAlchemy; defaults to an in-memory SQLite database. All models are
imported in create_tables() so every table is created in one call.
"""

import threading
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from lockerhub.config import settings
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _make_engine(url: str):
    if url.startswith("sqlite"):
        # One shared connection, otherwise each connection to sqlite:// gets an empty database
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    return create_engine(
        url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=10,
        max_overflow=20,
        echo=False,                  # Set True to log all SQL queries (debug only)
    )


def _import_models():
    from lockerhub.models.user import User                          # noqa
    from lockerhub.models.locker import Locker                      # noqa
    from lockerhub.models.package import Package                    # noqa
    from lockerhub.models.session import LockerSession              # noqa
    from lockerhub.models.audit_log import AssignmentLog, PickupLog  # noqa


class LockerStore:
    """
    Owns every entity table. All reads and writes go through transaction(),
    which holds one re-entrant lock for the whole store, so a read-check-write
    sequence is never interleaved with another one.
    """

    def __init__(self, url: str = None):
        self.url = url or settings.DATABASE_URL
        self.engine = _make_engine(self.url)
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine,
        )
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self):
        """Yield a DB session; commit on success, roll back on any exception."""
        with self._lock:
            db = self._session_factory()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def create_tables(self):
        """Creates all tables. Safe to call multiple times."""
        _import_models()
        Base.metadata.create_all(bind=self.engine)

    def reset(self):
        """Full data-store teardown: drops and recreates every table."""
        _import_models()
        with self._lock:
            Base.metadata.drop_all(bind=self.engine)
            Base.metadata.create_all(bind=self.engine)
        logger.warning(f"Store reset: all tables dropped and recreated ({self.url})")


store = LockerStore()


def get_store() -> LockerStore:
    """FastAPI dependency — the process-wide store."""
    return store


def create_tables():
    store.create_tables()
