import logging
from collections.abc import Iterable

from sqlalchemy.orm import sessionmaker

from glintstore.core.exceptions import NotFoundError
from glintstore.models.attribute import Attribute
from glintstore.models.database import storage_errors
from glintstore.stores.files import FileStore

logger = logging.getLogger(__name__)


class AttributeStore:
    """Named metadata values attached to a file."""

    def __init__(self, session_factory: sessionmaker, files: FileStore) -> None:
        self._session_factory = session_factory
        self._files = files

    def add_many(self, file_id: int, names: Iterable[str]) -> None:
        """Declare attributes on a file, all or nothing."""
        with storage_errors("add attributes"), self._session_factory() as db, db.begin():
            db.add_all([Attribute(file_id=file_id, attr=name) for name in names])

    def list_names(self, file_id: int) -> list[str]:
        with storage_errors("list attributes"), self._session_factory() as db:
            rows = (
                db.query(Attribute.attr)
                .filter(Attribute.file_id == file_id)
                .order_by(Attribute.attr)
                .all()
            )
        return [row.attr for row in rows]

    def set_metadata(self, account_id: int, path: str, attr: str, value: str) -> None:
        file_id = self._files.lookup_id(account_id, path)
        with storage_errors("set metadata"), self._session_factory() as db:
            updated = (
                db.query(Attribute)
                .filter(Attribute.file_id == file_id, Attribute.attr == attr)
                .update({Attribute.value: value}, synchronize_session=False)
            )
            if updated == 0:
                logger.debug("No attribute %r on file %s", attr, file_id)
                raise NotFoundError()
            db.commit()

    def lookup_metadata(self, account_id: int, path: str, attr: str) -> str:
        """Return ``{value}``, or ``""`` when the attribute has no value yet."""
        file_id = self._files.lookup_id(account_id, path)
        with storage_errors("lookup metadata"), self._session_factory() as db:
            value = (
                db.query(Attribute.value)
                .filter(Attribute.file_id == file_id, Attribute.attr == attr)
                .scalar()
            )
        if value is None:
            logger.debug("No attribute %r on file %s", attr, file_id)
            raise NotFoundError()
        if value == "":
            return ""
        return "{" + value + "}"
