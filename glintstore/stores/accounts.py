import logging

from sqlalchemy.orm import sessionmaker

from glintstore.core.exceptions import NotFoundError
from glintstore.core.security import DEFAULT_HASH_METHOD, hash_password, verify_password
from glintstore.models.account import Account
from glintstore.models.database import storage_errors

logger = logging.getLogger(__name__)


class AccountStore:
    """Accounts and password authentication."""

    def __init__(self, session_factory: sessionmaker, hash_method: str = DEFAULT_HASH_METHOD) -> None:
        self._session_factory = session_factory
        self._hash_method = hash_method

    def create(self, username: str, fullname: str = "", email: str = "", password: str | None = None) -> int:
        """Insert an account and return its id.

        With ``password=None`` the account has no credential and can never
        authenticate until a password is set.
        """
        password_hash = ""
        if password is not None:
            password_hash = hash_password(password, self._hash_method)

        with storage_errors("create account"), self._session_factory() as db:
            account = Account(
                username=username,
                fullname=fullname,
                email=email,
                password_hash=password_hash,
            )
            db.add(account)
            db.commit()
            return account.id

    def lookup_id(self, username: str) -> int:
        with storage_errors("lookup account"), self._session_factory() as db:
            row = db.query(Account.id).filter(Account.username == username).first()
        if row is None:
            logger.debug("No account named %r", username)
            raise NotFoundError()
        return row.id

    def lookup_password_hash(self, username: str) -> str:
        with storage_errors("lookup password"), self._session_factory() as db:
            row = db.query(Account.password_hash).filter(Account.username == username).first()
        if row is None:
            logger.debug("No account named %r", username)
            raise NotFoundError()
        return row.password_hash

    def authenticate(self, username: str, password: str) -> bool:
        """Check credentials.

        Unknown, disabled and password-less accounts all just return False,
        so the answer never tells the caller which case it was.
        """
        with storage_errors("authenticate"), self._session_factory() as db:
            row = (
                db.query(Account.password_hash, Account.disabled)
                .filter(Account.username == username)
                .first()
            )
        if row is None:
            logger.debug("Authentication failed for %r: no such account", username)
            return False
        if row.disabled:
            logger.debug("Authentication failed for %r: account disabled", username)
            return False
        if not row.password_hash:
            logger.debug("Authentication failed for %r: no password set", username)
            return False
        return verify_password(row.password_hash, password)

    def change_password(self, username: str, password: str) -> None:
        # no current-password check here; access control belongs to the caller
        password_hash = hash_password(password, self._hash_method)
        with storage_errors("change password"), self._session_factory() as db:
            updated = (
                db.query(Account)
                .filter(Account.username == username)
                .update({Account.password_hash: password_hash}, synchronize_session=False)
            )
            if updated == 0:
                logger.debug("Password change for unknown account %r", username)
                raise NotFoundError()
            db.commit()

    def set_disabled(self, username: str, disabled: bool = True) -> None:
        with storage_errors("disable account"), self._session_factory() as db:
            updated = (
                db.query(Account)
                .filter(Account.username == username)
                .update({Account.disabled: disabled}, synchronize_session=False)
            )
            if updated == 0:
                raise NotFoundError()
            db.commit()
        logger.info("Account %r %s", username, "disabled" if disabled else "enabled")
