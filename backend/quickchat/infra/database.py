import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quickchat.core.config import DATABASE_URL
from quickchat.models.base import Base

logger = logging.getLogger(__name__)

# =========================
# ENGINE CONFIGURATION
# =========================


def build_engine(url: str = DATABASE_URL):
    """
    Create the SQLAlchemy engine for `url`.
    SQLite (used by the tests) can't take the PostgreSQL pool settings, and an
    in-memory database must live on a single shared connection.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    return create_engine(
        url,
        pool_pre_ping=True,  # Check connections before using them
        pool_size=5,         # Maintain 5 connections in the pool
        max_overflow=10,     # Allow 10 extra connections if needed
        pool_recycle=3600,   # Recycle connections every hour
        echo=False           # Set True to see SQL statements (debugging)
    )


engine = build_engine()

# =========================
# SESSION CONFIGURATION
# =========================

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine
)

# =========================
# DATABASE FUNCTIONS
# =========================

def get_db():
    """
    FastAPI dependency to provide a DB session to routes.
    Usage:
        def my_route(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def db_session():
    """
    Context manager for standalone DB operations.
    Usage:
        with db_session() as db:
            user = db.query(User).first()
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db():
    """Create all tables for the registered models (users, messages)."""
    # Import models here to register them with Base
    from quickchat.models.user import User  # noqa: F401
    from quickchat.models.message import Message  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready: %s", sorted(Base.metadata.tables))


def reset_db():
    """Drop and recreate every table. Destroys all data."""
    from quickchat.models.user import User  # noqa: F401
    from quickchat.models.message import Message  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info("Database reset: %s", sorted(Base.metadata.tables))


def test_connection() -> bool:
    """
    Test DB connection.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("✅ Database connection successful")
        return True
    except Exception as e:
        logger.error("❌ Database connection failed: %s", e)
        return False


if __name__ == "__main__":
    test_connection()
