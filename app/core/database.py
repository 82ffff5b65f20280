import logging
import re
from typing import Any, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)

# $1, $2, ... as produced by app.core.sql
_POSITIONAL_PARAM_RE = re.compile(r"\$(\d+)")


def make_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine for `url`.

    SQLite connections get foreign key enforcement switched on so
    jobs.company_handle is checked (and cascades) the same way as on Postgres.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,
        max_overflow=20,
        **kwargs
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Create SQLAlchemy engine
engine = make_engine(settings.DATABASE_URL)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None):
    """
    Register the models and, when CREATE_TABLES is set, create their tables.
    """
    from app.models import company, job  # noqa: F401  Import models to register them

    if settings.CREATE_TABLES:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created")


def execute(db: Session, sql: str, values: Sequence[Any] = ()):
    """
    Run one statement written with `$n` positional placeholders.

    `$1` binds values[0], `$2` binds values[1], and so on. The statement is
    committed on its own; there is no transaction spanning several calls.

    Returns:
        List of result rows (fetched before the commit), or None for
        statements that return no rows
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    compiled = _POSITIONAL_PARAM_RE.sub(lambda m: f":p{m.group(1)}", sql)

    logger.debug("SQL: %s | params=%s", compiled, params)
    try:
        result = db.execute(text(compiled), params)
        rows = result.fetchall() if result.returns_rows else None
        db.commit()
    except Exception:
        db.rollback()
        raise

    return rows


# Postgres SQLSTATE codes; SQLite only reports the constraint kind in its message
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _violates(exc: IntegrityError, pgcode: str, sqlite_text: str) -> bool:
    if getattr(exc.orig, "pgcode", None) == pgcode:
        return True
    return sqlite_text in str(exc.orig).upper()


def is_unique_violation(exc: IntegrityError) -> bool:
    return _violates(exc, UNIQUE_VIOLATION, "UNIQUE CONSTRAINT")


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    return _violates(exc, FOREIGN_KEY_VIOLATION, "FOREIGN KEY CONSTRAINT")
