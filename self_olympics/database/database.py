# self_olympics/database/database.py
import logging
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from self_olympics.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Owns the process-wide connection pool and the session factory.
    Built once at startup and handed to the request handlers through app.state.
    """

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None, **engine_kwargs):
        if engine is None:
            if url is None:
                raise ValueError("Either a database url or an engine is required")
            engine = create_engine(url, **engine_kwargs)
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        # models register themselves on Base when imported
        from self_olympics.models import country, registration  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def init_database(settings: Settings) -> Database:
    engine_kwargs = {"pool_pre_ping": True}
    if not settings.DATABASE_URL.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )
    database = Database(settings.DATABASE_URL, **engine_kwargs)
    logger.info(f"Connection pool ready for {database.engine.url.render_as_string(hide_password=True)}")
    if settings.AUTO_CREATE_TABLES:
        database.create_all()
    return database


# Define the get_db function
def get_db(request: Request):
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
