from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import ContextManager, Iterator, Protocol

import mysql.connector

from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import StoreUnavailable
from ..database.connection import DatabaseConnection

logger = logging.getLogger(__name__)


def lock_name(user_id: int, work_date: date) -> str:
    return f"worktime:summary:{int(user_id)}:{work_date.isoformat()}"


class KeyLocks(Protocol):
    def hold(self, user_id: int, work_date: date) -> ContextManager[None]:
        """Serialize recomputations of one (user, date); other keys run freely."""

        raise NotImplementedError


class InProcessKeyLocks(KeyLocks):
    """One threading lock per key, dropped once nobody holds or waits on it."""

    def __init__(self, *, timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._timeout = float(timeout)
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._users: dict[str, int] = {}

    @contextmanager
    def hold(self, user_id: int, work_date: date) -> Iterator[None]:
        name = lock_name(user_id, work_date)
        with self._guard:
            lock = self._locks.setdefault(name, threading.Lock())
            self._users[name] = self._users.get(name, 0) + 1
        try:
            if not lock.acquire(timeout=self._timeout):
                logger.error("Timed out waiting for %s", name)
                raise StoreUnavailable(f"Timed out waiting for lock {name}")
            try:
                yield
            finally:
                lock.release()
        finally:
            with self._guard:
                self._users[name] -= 1
                if self._users[name] == 0:
                    del self._users[name]
                    del self._locks[name]


class MySQLAdvisoryLocks(KeyLocks):
    """``GET_LOCK`` per key on a dedicated connection, for multi-process setups."""

    def __init__(self, conn_factory: DatabaseConnection, *, timeout: int = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._conn_factory = conn_factory
        self._timeout = int(timeout)

    @contextmanager
    def hold(self, user_id: int, work_date: date) -> Iterator[None]:
        name = lock_name(user_id, work_date)
        try:
            conn = self._conn_factory.connect()
        except mysql.connector.Error as exc:
            logger.error("Lock connection for %s failed: %s", name, exc)
            raise StoreUnavailable(f"Lock connection failed: {exc}") from exc

        try:
            cur = conn.cursor()
            cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._timeout))
            (acquired,) = cur.fetchone()
            if acquired != 1:
                logger.error("Timed out waiting for %s", name)
                raise StoreUnavailable(f"Timed out waiting for lock {name}")
            try:
                yield
            finally:
                cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                cur.fetchone()
                cur.close()
        finally:
            conn.close()
