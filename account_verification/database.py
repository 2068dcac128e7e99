from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .core.settings import settings


def _connect_args(url: str) -> dict:
    # Sessions are opened in FastAPI's threadpool, not the thread that created the connection.
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Yield a session for member lookups.

    This service never writes member rows, so the session is always rolled
    back rather than committed.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
