# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL. The engine and its connection pool are owned
by a Database instance created by the application factory, opened at startup and
disposed at shutdown, instead of living in a module-level global.
"""

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


class Database:
    """Owns one engine (and therefore one connection pool) plus its session factory."""

    def __init__(self, url: str = None, **engine_kwargs):
        self.url = url or settings.DATABASE_URL
        self.engine = create_engine(self.url, **self._engine_options(engine_kwargs))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def _engine_options(self, overrides: dict) -> dict:
        if self.url.startswith("sqlite"):
            # In-memory SQLite must share a single connection across threads
            options = {"connect_args": {"check_same_thread": False}}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                options["poolclass"] = StaticPool
        else:
            options = {
                "pool_pre_ping": True,       # Auto-reconnect if DB connection drops
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_timeout": settings.DB_POOL_TIMEOUT_SECONDS,
            }
            if self.url.startswith("postgresql"):
                options["connect_args"] = {
                    "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
                }
        options["echo"] = False              # Set True to log all SQL queries (debug only)
        options.update(overrides)
        return options

    def create_tables(self):
        """
        Creates all DB tables. Safe to call multiple times.
        Import all models here so SQLAlchemy knows about them.
        """
        from app.models.car import Car                            # noqa
        from app.models.idempotency_key import IdempotencyKey     # noqa

        Base.metadata.create_all(bind=self.engine)

    def check_connection(self) -> bool:
        """Run a trivial query; logs a hint and returns False when the database is unreachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"❌ Cannot connect to database: {e}")
            return False

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """FastAPI dependency — yields a DB session from the app's Database and closes it after request."""
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
