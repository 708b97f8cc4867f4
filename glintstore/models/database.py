import logging
from contextlib import contextmanager

from sqlalchemy import BigInteger, Integer, create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from glintstore.core.config import Settings
from glintstore.core.exceptions import DuplicateConstraintError, StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()

# SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

# BIGINT keys on PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer, "sqlite")


def _on_sqlite_connect(dbapi_connection, connection_record):
    # pysqlite never sends BEGIN before DDL; take over transaction control
    # so schema creation rolls back as a unit
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    # foreign keys are off per connection unless switched on
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_sqlite_begin(conn):
    conn.exec_driver_sql("BEGIN")


def _is_memory_database(url: URL) -> bool:
    return url.database in (None, "", ":memory:")


def make_engine(url: str | URL, settings: Settings | None = None, **kwargs) -> Engine:
    """Create the pooled engine shared by every store of one Storage.

    An in-memory SQLite database lives in a single connection, so unless a
    pool class is given it gets a StaticPool shared by every thread.
    """
    url = make_url(url)
    sqlite = url.get_backend_name() == "sqlite"
    options = {"pool_pre_ping": True}
    if settings is not None and not sqlite:
        options["pool_size"] = settings.db_pool_size
        options["pool_timeout"] = settings.db_pool_timeout
    if sqlite and _is_memory_database(url) and "poolclass" not in kwargs:
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    options.update(kwargs)

    engine = create_engine(url, **options)
    if sqlite:
        event.listen(engine, "connect", _on_sqlite_connect)
        event.listen(engine, "begin", _on_sqlite_begin)
    logger.debug("Created engine for %s", url.render_as_string(hide_password=True))
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(orig)


@contextmanager
def storage_errors(action: str):
    """Re-raise SQLAlchemy failures as StorageError or DuplicateConstraintError."""
    try:
        yield
    except IntegrityError as exc:
        if _is_unique_violation(exc):
            raise DuplicateConstraintError(f"{action}: already exists") from exc
        raise StorageError(f"{action}: constraint violated") from exc
    except SQLAlchemyError as exc:
        raise StorageError(f"{action}: {exc.__class__.__name__}") from exc
