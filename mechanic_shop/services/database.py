"""Database connection and session management."""

import logging
from typing import Union

from sqlalchemy import create_engine, func, select, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session, sessionmaker

from mechanic_shop.models.base import Base

logger = logging.getLogger(__name__)


def init_db(
    database_url: Union[str, URL], echo: bool = False, create_tables: bool = True
) -> Engine:
    """Create the engine, check that the database answers, and create tables.

    Raises SQLAlchemyError if the database cannot be reached or the tables
    cannot be created; the engine is disposed first. Callers treat that as
    fatal.
    """
    engine = create_engine(database_url, echo=echo, future=True, pool_pre_ping=True)

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        engine.dispose()
        raise

    if create_tables:
        try:
            Base.metadata.create_all(engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create tables: {e}", exc_info=True)
            engine.dispose()
            raise

    logger.info(f"Connected to {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to the engine."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


def close_db(engine: Engine) -> None:
    """Dispose of the engine and its pooled connections."""
    if engine is not None:
        engine.dispose()
        logger.info("Database engine disposed")


def next_identifier(db: Session, column: InstrumentedAttribute) -> int:
    """Return max(column) + 1, or 1 for an empty table.

    Read-then-write: two writers running at the same time can compute the
    same value, and the second insert then fails on the primary key.
    """
    current = db.execute(select(func.coalesce(func.max(column), 0))).scalar_one()
    return int(current) + 1
