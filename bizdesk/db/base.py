"""
Base repository module with connection management.

Provides the foundation for all database operations in bizdesk: a
ConnectionManager that owns the database file and hands out scoped
connections, and a BaseRepository that every entity repository extends.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Optional

from bizdesk.config import DB_TIMEOUT
from bizdesk.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Owns the SQLite database file.

    Regular operations enter through ``connection()``, which takes the shared
    side of a gate. ``exclusive()`` waits for in-flight operations to finish
    and blocks new ones; ``swap()`` uses it to replace the file underneath a
    closed database and reopen it.
    """

    def __init__(self, db_path: Path, timeout: float = DB_TIMEOUT):
        """
        Initialize the manager. The database is not usable until open().

        Args:
            db_path: Path to the SQLite database file
            timeout: Seconds sqlite waits on a locked database
        """
        self.db_path = Path(db_path)
        self.timeout = timeout
        self._cond = threading.Condition()
        self._active = 0
        self._exclusive = False
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self):
        """Ensure the database directory exists and accept operations."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Database directory ensured: {self.db_path.parent}")
        except Exception as e:
            logger.error(f"Failed to create database directory: {e}", exc_info=True)
            raise
        with self._cond:
            self._open = True
        logger.info(f"Database opened: {self.db_path}")

    def close(self):
        """Wait for in-flight operations, then refuse new ones."""
        with self.exclusive():
            self._open = False
        logger.info(f"Database closed: {self.db_path}")

    def connect(self, path: Optional[Path] = None) -> sqlite3.Connection:
        """Open a raw connection to the live file, or to path. Callers own closing it."""
        conn = sqlite3.connect(
            path or self.db_path, timeout=self.timeout, check_same_thread=False
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _shared(self):
        with self._cond:
            while self._exclusive:
                self._cond.wait()
            if not self._open:
                raise DatabaseUnavailableError(f"Database {self.db_path} is closed")
            self._active += 1
        try:
            yield
        finally:
            with self._cond:
                self._active -= 1
                self._cond.notify_all()

    @contextmanager
    def exclusive(self):
        """Block new operations and wait until in-flight ones complete."""
        with self._cond:
            while self._exclusive:
                self._cond.wait()
            self._exclusive = True
            while self._active:
                self._cond.wait()
        try:
            yield
        finally:
            with self._cond:
                self._exclusive = False
                self._cond.notify_all()

    @contextmanager
    def connection(self):
        """
        Scoped connection: commits on success, rolls back on any error.

        Every statement issued inside one ``with`` block belongs to the same
        transaction.
        """
        with self._shared():
            conn = None
            try:
                conn = self.connect()
                yield conn
                conn.commit()
            except sqlite3.OperationalError as e:
                logger.error(f"Database locked or operational error: {e}", exc_info=True)
                if conn:
                    conn.rollback()
                raise
            except sqlite3.Error as e:
                logger.error(f"Database error: {e}", exc_info=True)
                if conn:
                    conn.rollback()
                raise
            except Exception:
                if conn:
                    conn.rollback()
                raise
            finally:
                if conn:
                    conn.close()

    def swap(self, replace: Callable[[Path], None]):
        """
        Replace the database file while no operation can observe it.

        The database is closed, ``replace`` is called with the live path, and
        the database is reopened whether or not ``replace`` succeeded. ``replace``
        must leave the original file untouched unless it succeeds.

        Args:
            replace: Callable that writes the new database file at the given path
        """
        with self.exclusive():
            self._open = False
            logger.info(f"Database closed for swap: {self.db_path}")
            try:
                replace(self.db_path)
            finally:
                self._open = True
                logger.info(f"Database reopened after swap: {self.db_path}")


class BaseRepository:
    """
    Base repository class.

    Holds the shared ConnectionManager and a few row helpers used by all
    entity repositories.
    """

    def __init__(self, manager: ConnectionManager):
        """
        Initialize the base repository.

        Args:
            manager: Connection manager owning the database file
        """
        self.manager = manager

    @property
    def db_path(self) -> Path:
        return self.manager.db_path

    def _get_connection(self):
        """Context manager for a transactional database connection."""
        return self.manager.connection()

    @staticmethod
    def _update_fields(conn, table: str, record_id: int, values: dict) -> int:
        """UPDATE the given columns of one row. Column names are trusted."""
        assignments = ", ".join(f"{column} = ?" for column in values)
        cursor = conn.execute(
            f"UPDATE {table} SET {assignments} WHERE id = ?",
            (*values.values(), record_id),
        )
        return cursor.rowcount

    @staticmethod
    def _insert(conn, table: str, values: dict) -> int:
        """INSERT one row and return its id. Column names are trusted."""
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        cursor = conn.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
            tuple(values.values()),
        )
        return cursor.lastrowid
