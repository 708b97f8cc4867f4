"""Detect and create the account, file and attribute tables."""

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from glintstore.models.account import Account
from glintstore.models.attribute import Attribute
from glintstore.models.database import storage_errors
from glintstore.models.file import File

logger = logging.getLogger(__name__)

# Dependency order: file references account, attribute references file
TABLES = (Account.__table__, File.__table__, Attribute.__table__)


class SchemaManager:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def exists(self) -> bool:
        """True if the account table is present in the catalog."""
        with storage_errors("schema probe"):
            return inspect(self._engine).has_table(Account.__tablename__)

    def create_all(self) -> None:
        """Create all tables in one transaction; all or none persist."""
        logger.info("Initializing database")
        with storage_errors("create schema"):
            with self._engine.begin() as conn:
                for table in TABLES:
                    table.create(conn)

    def ensure_ready(self) -> None:
        if not self.exists():
            self.create_all()

    def drop_all(self) -> None:
        logger.warning("Dropping all glintstore tables")
        with storage_errors("drop schema"):
            with self._engine.begin() as conn:
                for table in reversed(TABLES):
                    table.drop(conn, checkfirst=True)
