"""SQLAlchemy implementation of the key-value storage backend."""

from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from admindash.storage.base import StorageBackend, StorageError
from admindash.storage.models import KeyValueEntry, create_session_factory


class SQLAlchemyStorage(StorageBackend):
    """SQLAlchemy-based implementation of StorageBackend."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')

        Raises:
            StorageError: If the engine or schema cannot be created
        """
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not open storage at {database_url}: {e}") from e
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def get_item(self, key: str) -> Optional[str]:
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key)
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not read '{key}': {e}") from e
        return None if entry is None else entry.value

    def set_item(self, key: str, value: str) -> None:
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not write '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        session = self._get_session()
        try:
            session.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not remove '{key}': {e}") from e

    def clear(self) -> None:
        session = self._get_session()
        try:
            session.query(KeyValueEntry).delete()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not clear storage: {e}") from e

    def keys(self) -> list[str]:
        session = self._get_session()
        try:
            rows = session.query(KeyValueEntry.key).order_by(KeyValueEntry.key).all()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not list keys: {e}") from e
        return [row[0] for row in rows]
