from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .connection import DatabaseConnection

# (conn, cur) of the transaction pinned by db_transaction for the current context.
_pinned: ContextVar[Optional[Tuple[Any, Any]]] = ContextVar("technician_scheduler_pinned_tx", default=None)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cur)`` for one operation.

    Inside ``db_transaction`` the pinned cursor is reused and committing is
    left to the transaction owner.
    """

    pinned = _pinned.get()
    if pinned is not None:
        yield pinned
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def db_transaction(conn_factory: DatabaseConnection):
    """Pin one connection so every ``db_cursor`` in the block shares a transaction."""

    if _pinned.get() is not None:
        raise RuntimeError("Nested db_transaction is not supported")

    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    token = _pinned.set((conn, cur))
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        _pinned.reset(token)
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for ``IN (...)``; callers guard against empty input."""
    return ",".join(["%s"] * len(values))
