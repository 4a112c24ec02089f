from __future__ import annotations

from datetime import date

import mysql.connector
import pytest

from technician_scheduler.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from technician_scheduler.core.exceptions import PersistenceError
from technician_scheduler.database.bootstrap import iter_sql_statements
from technician_scheduler.database.mysql_base import db_cursor, db_transaction
from technician_scheduler.database.transactions import MySQLTransactionManager


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.closed = False
        self.rowcount = 0

    def execute(self, sql, params=None):
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise mysql.connector.Error(msg="lock wait timeout")
        self._conn.executed.append((sql, params))

    def executemany(self, sql, seq_params):
        self.execute(sql, list(seq_params))

    def fetchone(self):
        return None

    def fetchall(self):
        return []

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.connections: list[FakeConnection] = []

    def connect(self):
        conn = FakeConnection(self.fail_on)
        self.connections.append(conn)
        return conn


def test_db_cursor_commits_and_closes():
    factory = FakeFactory()

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    (conn,) = factory.connections
    assert (conn.commits, conn.rollbacks, conn.closed) == (1, 0, True)


def test_db_cursor_rolls_back_on_error():
    factory = FakeFactory()

    with pytest.raises(ValueError):
        with db_cursor(factory):
            raise ValueError("boom")

    (conn,) = factory.connections
    assert (conn.commits, conn.rollbacks, conn.closed) == (0, 1, True)


def test_cursors_inside_transaction_share_one_connection():
    factory = FakeFactory()

    with db_transaction(factory):
        with db_cursor(factory) as (_, cur):
            cur.execute("DELETE FROM attendance")
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT INTO attendance")

    (conn,) = factory.connections
    assert [sql for sql, _ in conn.executed] == ["DELETE FROM attendance", "INSERT INTO attendance"]
    assert conn.commits == 1


def test_nested_transaction_is_refused():
    factory = FakeFactory()

    with db_transaction(factory):
        with pytest.raises(RuntimeError):
            with db_transaction(factory):
                pass


def test_project_scope_locks_row_and_commits():
    factory = FakeFactory()
    tx = MySQLTransactionManager(factory)

    with tx.project_scope(7):
        with db_cursor(factory) as (_, cur):
            cur.execute("UPDATE projects SET project_status='ongoing'")

    (conn,) = factory.connections
    assert "FOR UPDATE" in conn.executed[0][0]
    assert conn.executed[0][1] == (7,)
    assert (conn.commits, conn.rollbacks) == (1, 0)


def test_project_scope_wraps_driver_errors():
    factory = FakeFactory(fail_on="INSERT")
    tx = MySQLTransactionManager(factory)

    with pytest.raises(PersistenceError):
        with tx.project_scope(7):
            with db_cursor(factory) as (_, cur):
                cur.execute("DELETE FROM attendance")
                cur.execute("INSERT INTO attendance")

    (conn,) = factory.connections
    assert (conn.commits, conn.rollbacks, conn.closed) == (0, 1, True)


def test_sql_splitter_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- seed; not a statement
    INSERT INTO technicians (code, name) VALUES ('TK;1', 'A');
    INSERT INTO technicians (code, name) VALUES ("TK2", 'O\\'Neil');
    """

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 2
    assert "'TK;1'" in statements[0]
    assert statements[1].endswith("'O\\'Neil')")


def test_empty_replace_still_marks_the_day_answered():
    factory = FakeFactory()
    repo = MySQLAttendanceRepository(factory)

    with db_transaction(factory):
        inserted = repo.replace_for_date(work_date=date(2024, 1, 2), project_ids=[3], rows=[])

    (conn,) = factory.connections
    assert inserted == 0
    assert conn.executed[0][0].startswith("DELETE FROM attendance WHERE")
    sql, params = conn.executed[-1]
    assert "INTO attendance_days" in sql
    assert params == [(3, date(2024, 1, 2))]
    assert conn.commits == 1
