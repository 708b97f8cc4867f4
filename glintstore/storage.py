"""Single entry point over schema, accounts, files and attributes.

A ``Storage`` owns one pooled engine. Every store gets the session factory
built from that engine, so each call runs in its own session and nothing is
shared between concurrent callers except the pool.
"""

import logging
from collections.abc import Iterable

from sqlalchemy import text
from sqlalchemy.engine import URL, Engine

from glintstore.core.config import Settings, get_settings
from glintstore.core.exceptions import StorageError
from glintstore.models.database import make_engine, make_session_factory, storage_errors
from glintstore.models.schema import SchemaManager
from glintstore.stores.accounts import AccountStore
from glintstore.stores.attributes import AttributeStore
from glintstore.stores.files import FileStore

logger = logging.getLogger(__name__)


class Storage:
    def __init__(self, engine: Engine | None = None, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._engine: Engine | None = None
        if engine is not None:
            self._bind(engine)

    def _bind(self, engine: Engine) -> None:
        session_factory = make_session_factory(engine)
        self._engine = engine
        self._schema = SchemaManager(engine)
        self._accounts = AccountStore(session_factory, self._settings.password_hash_method)
        self._files = FileStore(session_factory)
        self._attributes = AttributeStore(session_factory, self._files)

    def _require_engine(self) -> None:
        if self._engine is None:
            raise StorageError("storage is not connected")

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @property
    def schema(self) -> SchemaManager:
        self._require_engine()
        return self._schema

    @property
    def accounts(self) -> AccountStore:
        self._require_engine()
        return self._accounts

    @property
    def files(self) -> FileStore:
        self._require_engine()
        return self._files

    @property
    def attributes(self) -> AttributeStore:
        self._require_engine()
        return self._attributes

    # lifecycle

    def connect(self, host: str, port: int | str, user: str, password: str, dbname: str) -> None:
        """Open the connection pool from individual parameters."""
        settings = self._settings.model_copy(
            update={
                "db_host": host,
                "db_port": int(port),
                "db_user": user,
                "db_password": password,
                "db_name": dbname,
                "database_url": None,
            }
        )
        self.connect_url(settings.sqlalchemy_url())

    def connect_url(self, url: str | URL | None = None) -> None:
        """Open the connection pool and check it with a round trip.

        Without a URL the configured settings are used.
        """
        if url is None:
            url = self._settings.sqlalchemy_url()
        engine = make_engine(url, self._settings)
        try:
            with storage_errors("connect"), engine.connect() as conn:
                conn.execute(text("select 1"))
        except StorageError:
            engine.dispose()
            raise
        # release the previous pool before replacing it
        self.disconnect()
        self._bind(engine)
        logger.info("Connected to %s", engine.url.render_as_string(hide_password=True))

    def disconnect(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.info("Disconnected from database")

    def setup(self) -> None:
        """Create the schema unless it already exists."""
        self.schema.ensure_ready()

    def __enter__(self) -> "Storage":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()

    # accounts

    def authenticate(self, username: str, password: str) -> bool:
        return self.accounts.authenticate(username, password)

    def add_person(self, username: str, fullname: str, email: str, password: str | None) -> int:
        return self.accounts.create(username, fullname, email, password)

    def change_password(self, username: str, password: str) -> None:
        self.accounts.change_password(username, password)

    def lookup_person_id(self, username: str) -> int:
        return self.accounts.lookup_id(username)

    def disable_person(self, username: str, disabled: bool = True) -> None:
        self.accounts.set_disabled(username, disabled)

    # files

    def add_file(self, person_id: int, path: str, data: str) -> int:
        return self.files.add(person_id, path, data)

    def lookup_file_id(self, person_id: int, path: str) -> int:
        return self.files.lookup_id(person_id, path)

    def lookup_data(self, person_id: int, path: str) -> str:
        return self.files.lookup_data(person_id, path)

    def lookup_data_list(self, person_id: int) -> str:
        return "".join(f"{line}\n" for line in self.files.iter_path_report(person_id))

    def delete_file(self, person_id: int, path: str) -> None:
        self.files.delete(person_id, path)

    # attributes

    def add_attributes(self, file_id: int, attrs: Iterable[str]) -> None:
        self.attributes.add_many(file_id, attrs)

    def add_metadata(self, person_id: int, path: str, attribute: str, metadata: str) -> None:
        self.attributes.set_metadata(person_id, path, attribute, metadata)

    def lookup_metadata(self, person_id: int, path: str, attribute: str) -> str:
        return self.attributes.lookup_metadata(person_id, path, attribute)
