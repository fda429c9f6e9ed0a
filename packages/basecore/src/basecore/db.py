import functools

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from basecore.settings import get_settings


@functools.lru_cache()
def get_engine():
    """
    Get SQLAlchemy engine (cached).

    This function lazily initializes the engine to avoid import-time side effects.
    The engine is created using DATABASE_URL from settings.
    """
    settings = get_settings()
    return create_engine(settings.DATABASE_URL, pool_pre_ping=True, echo=False)


@functools.lru_cache()
def get_sessionmaker() -> sessionmaker:
    """
    Get SQLAlchemy sessionmaker (cached).

    Dispatch code receives this factory rather than a session so that request
    creation and outcome reconciliation can each run in their own transaction.
    """
    engine = get_engine()
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency generator yielding a database session.

    Yields a database session and ensures it's closed after use.
    """
    SessionLocal = get_sessionmaker()
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
