# pos_api/database.py

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from pos_api.core.config import settings
from pos_api.core.errors import ValidationFailure

logger = logging.getLogger("app")

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False


def enforce_foreign_keys(engine):
    """SQLite ignores foreign keys unless each connection turns them on."""

    @event.listens_for(engine, "connect")
    def _foreign_keys_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

if engine.dialect.name == "sqlite":
    enforce_foreign_keys(engine)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Run a unit of work on ``db`` and commit it, or roll everything back.

    Helpers called inside the block share the session and must not commit
    themselves. Constraint violations reported by the database surface as
    ``ValidationFailure``.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Rolled back transaction: {exc.orig}")
        raise ValidationFailure(f"Constraint violation: {exc.orig}") from exc
    except Exception:
        db.rollback()
        raise
