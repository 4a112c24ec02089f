from __future__ import annotations

from contextlib import contextmanager
from typing import ContextManager, Protocol

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection
from .mysql_base import db_transaction, fetchone


class TransactionManager(Protocol):
    def project_scope(self, project_id: int) -> ContextManager[None]:
        """Serialize writers of one project and make the block atomic.

        Storage failures inside the block surface as PersistenceError after
        the block has been rolled back.
        """

        raise NotImplementedError


class MySQLTransactionManager(TransactionManager):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def project_scope(self, project_id: int):
        try:
            with db_transaction(self._conn_factory) as (_, cur):
                # Row lock: a concurrent writer of the same project waits here.
                cur.execute("SELECT project_id FROM projects WHERE project_id=%s FOR UPDATE", (int(project_id),))
                fetchone(cur)
                yield
        except mysql.connector.Error as e:
            raise PersistenceError(f"Gagal menyimpan perubahan proyek {project_id}: {e}") from e
