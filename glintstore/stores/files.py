import logging
from collections.abc import Iterable, Iterator

from sqlalchemy.orm import Session, sessionmaker

from glintstore.core.exceptions import NotFoundError
from glintstore.models.attribute import Attribute
from glintstore.models.database import storage_errors
from glintstore.models.file import File

logger = logging.getLogger(__name__)

PATH_REPORT_HEADER = "name"


def render_path_report(paths: Iterable[str]) -> Iterator[str]:
    """Yield the path listing as table rows: a header, then one path each."""
    yield PATH_REPORT_HEADER
    yield from paths


def _file_id(db: Session, account_id: int, path: str) -> int:
    row = db.query(File.id).filter(File.account_id == account_id, File.path == path).first()
    if row is None:
        logger.debug("No file %r for account %s", path, account_id)
        raise NotFoundError()
    return row.id


class FileStore:
    """Per-account file content, keyed by (account, path)."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def add(self, account_id: int, path: str, data: str) -> int:
        with storage_errors("add file"), self._session_factory() as db:
            file = File(account_id=account_id, path=path, data=data)
            db.add(file)
            db.commit()
            return file.id

    def lookup_id(self, account_id: int, path: str) -> int:
        with storage_errors("lookup file"), self._session_factory() as db:
            return _file_id(db, account_id, path)

    def lookup_data(self, account_id: int, path: str) -> str:
        with storage_errors("lookup data"), self._session_factory() as db:
            row = (
                db.query(File.data)
                .filter(File.account_id == account_id, File.path == path)
                .first()
            )
        if row is None:
            logger.debug("No file %r for account %s", path, account_id)
            raise NotFoundError()
        return row.data

    def list_paths(self, account_id: int) -> list[str]:
        with storage_errors("list files"), self._session_factory() as db:
            rows = (
                db.query(File.path)
                .filter(File.account_id == account_id)
                .order_by(File.path)
                .all()
            )
        return [row.path for row in rows]

    def iter_path_report(self, account_id: int) -> Iterator[str]:
        """Report lines for an account's files.

        The query runs here, not on first iteration, so errors surface at
        the call and no connection is held while the caller iterates.
        """
        return render_path_report(self.list_paths(account_id))

    def delete(self, account_id: int, path: str) -> None:
        """Delete a file and its attributes in one transaction.

        Attributes go first because they reference the file row.
        """
        with storage_errors("delete file"), self._session_factory() as db, db.begin():
            file_id = _file_id(db, account_id, path)
            db.query(Attribute).filter(Attribute.file_id == file_id).delete(synchronize_session=False)
            db.query(File).filter(File.id == file_id).delete(synchronize_session=False)
        logger.debug("Deleted file %s (%r) for account %s", file_id, path, account_id)
